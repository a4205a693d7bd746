"""Tests for the best-effort platform log helper."""

import logging
from unittest.mock import AsyncMock

import pytest

from freebase.errors import ErrorKind, PlatformLogError
from freebase.platform_log import INFO, WARN, emit


@pytest.mark.asyncio
async def test_emit_delivers_to_platform() -> None:
    platform = AsyncMock()
    assert await emit(platform, "Src", INFO, "hello") is None
    platform.log.assert_awaited_once_with("Src", "INFO", "hello")


@pytest.mark.asyncio
async def test_emit_falls_back_on_failure(
    capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    platform = AsyncMock()
    platform.log.side_effect = RuntimeError("sink down")
    with caplog.at_level(logging.DEBUG, logger="freebase.platform_log"):
        err = await emit(platform, "Src", WARN, "careful")
    assert isinstance(err, PlatformLogError)
    assert err.kind is ErrorKind.PLATFORM_LOG
    assert "sink down" in str(err)
    assert capsys.readouterr().out == "[WARN] careful\n"
    assert "platform log failed for Src" in caplog.text


@pytest.mark.asyncio
async def test_emit_without_platform(capsys: pytest.CaptureFixture[str]) -> None:
    assert isinstance(await emit(None, "Src", INFO, "early"), PlatformLogError)
    assert capsys.readouterr().out == "[INFO] early\n"
