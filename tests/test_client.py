"""Tests for the Sniffer client and module-level helpers."""

import asyncio
import io
import json
import logging
from pathlib import Path

import pytest

from magicsniff import classify_file, classify_file_async
from magicsniff.client import Sniffer
from magicsniff.config import SnifferConfig
from magicsniff.exceptions import AcquisitionError, ConfigurationError
from magicsniff.results import Recognized, Unknown
from magicsniff.signatures import SignatureTable
from magicsniff.standard import STANDARD_TABLE
from tests.conftest import MP4_WINDOW, PNG_WINDOW, ZERO_WINDOW


@pytest.fixture
def png_renamed_to_jpg(tmp_path: Path) -> Path:
    f = tmp_path / "photo.jpg"
    f.write_bytes(PNG_WINDOW + b"\x00" * 200)
    return f


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    f = tmp_path / "notes.txt"
    f.write_text("just some notes, no magic here\n")
    return f


class TestSnifferInit:
    """Test client initialization and table resolution."""

    def test_defaults_to_standard_table(self, default_config: SnifferConfig) -> None:
        sniffer = Sniffer(default_config)
        assert sniffer.table is STANDARD_TABLE

    def test_explicit_table(self, default_config: SnifferConfig, sample_table: SignatureTable) -> None:
        assert Sniffer(default_config, table=sample_table).table is sample_table

    def test_signatures_file(self, tmp_path: Path, sample_records: list[dict]) -> None:
        path = tmp_path / "signatures.json"
        path.write_text(json.dumps(sample_records))
        sniffer = Sniffer(signatures_file=str(path))
        assert len(sniffer.table) == 3

    def test_signatures_file_from_env(
        self, tmp_path: Path, sample_records: list[dict], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "signatures.json"
        path.write_text(json.dumps(sample_records[:1]))
        monkeypatch.setenv("MAGICSNIFF_SIGNATURES_FILE", str(path))
        assert len(Sniffer().table) == 1

    def test_invalid_config_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            Sniffer(SnifferConfig(window_start=10, window_end=2, _loaded=True))

    def test_invalid_signatures_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "signatures.json"
        path.write_text(json.dumps([{"mime": "image/png", "pattern": []}]))
        with pytest.raises(ConfigurationError, match="index 0"):
            Sniffer(signatures_file=str(path))

    def test_config_kwargs(self) -> None:
        sniffer = Sniffer(fallback_mime="text/plain", window_end=64)
        assert sniffer.config.fallback_mime == "text/plain"
        assert sniffer.config.window_range == (0, 64)

    def test_repr(self, default_config: SnifferConfig, sample_table: SignatureTable) -> None:
        assert repr(Sniffer(default_config, table=sample_table)) == (
            "Sniffer(signatures=3, window=(0, 32))"
        )

    def test_init_logs_table_and_window(
        self, default_config: SnifferConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="magicsniff"):
            Sniffer(default_config)
        assert "built-in signatures (32-byte window from offset 0)" in caplog.text

    def test_init_logs_custom_table(
        self, tmp_path: Path, sample_records: list[dict], caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "signatures.json"
        path.write_text(json.dumps(sample_records))
        with caplog.at_level(logging.INFO, logger="magicsniff"):
            Sniffer(signatures_file=str(path), window_start=4, window_end=20)
        assert "3 custom signatures (16-byte window from offset 4)" in caplog.text


class TestSnifferClassify:
    """Test classification of bytes and files."""

    def test_classify_bytes(self, default_config: SnifferConfig) -> None:
        result = Sniffer(default_config).classify(PNG_WINDOW)
        assert result == Recognized(mime="image/png", extensions=("png",))

    def test_classify_bytes_uses_configured_fallback(self, default_config: SnifferConfig) -> None:
        assert Sniffer(default_config).classify(ZERO_WINDOW) == Unknown("application/octet-stream")

    def test_classify_bytes_explicit_fallback(self, default_config: SnifferConfig) -> None:
        assert Sniffer(default_config).classify(b"", "text/csv") == Unknown("text/csv")

    def test_renamed_file_detected_by_content(
        self, default_config: SnifferConfig, png_renamed_to_jpg: Path
    ) -> None:
        result = Sniffer(default_config).classify_file(png_renamed_to_jpg)
        assert result.mime == "image/png"
        assert result.extension == "png"

    def test_unknown_file_falls_back_to_declared_type(
        self, default_config: SnifferConfig, text_file: Path
    ) -> None:
        assert Sniffer(default_config).classify_file(text_file) == Unknown("text/plain")

    def test_explicit_fallback_beats_declared_type(
        self, default_config: SnifferConfig, text_file: Path
    ) -> None:
        result = Sniffer(default_config).classify_file(text_file, "application/x-custom")
        assert result == Unknown("application/x-custom")

    def test_nameless_source_uses_configured_fallback(self, default_config: SnifferConfig) -> None:
        result = Sniffer(default_config).classify_file(io.BytesIO(b"plain text"))
        assert result == Unknown("application/octet-stream")

    def test_filename_hint_for_bytes(self, default_config: SnifferConfig) -> None:
        result = Sniffer(default_config).classify_file(b"a,b,c\n", filename="data.csv")
        assert result == Unknown("text/csv")

    def test_window_range_override(self, default_config: SnifferConfig) -> None:
        data = b"\xff" * 100 + PNG_WINDOW
        sniffer = Sniffer(default_config)
        assert not sniffer.classify_file(data).is_recognized
        assert sniffer.classify_file(data, window_range=(100, 132)).mime == "image/png"

    def test_configured_window(self) -> None:
        window = bytearray(512)
        window[257:262] = b"ustar"
        sniffer = Sniffer(SnifferConfig(window_end=512, _loaded=True))
        assert sniffer.classify_file(bytes(window)).mime == "application/x-tar"

    def test_missing_file_raises(self, default_config: SnifferConfig, tmp_path: Path) -> None:
        with pytest.raises(AcquisitionError):
            Sniffer(default_config).classify_file(tmp_path / "gone.png")

    def test_async(self, default_config: SnifferConfig, png_renamed_to_jpg: Path) -> None:
        async def run() -> Recognized:
            async with Sniffer(default_config) as sniffer:
                return await sniffer.classify_file_async(png_renamed_to_jpg)

        assert asyncio.run(run()).mime == "image/png"

    def test_context_manager(self, default_config: SnifferConfig) -> None:
        with Sniffer(default_config) as sniffer:
            assert sniffer.classify(MP4_WINDOW).mime == "video/mp4"


class TestSnifferLifecycle:
    """Test closing the HTTP session."""

    def test_close_without_session(self, default_config: SnifferConfig) -> None:
        sniffer = Sniffer(default_config)
        sniffer.close()
        assert sniffer._session is None

    def test_close_after_session_loop_ended(self, default_config: SnifferConfig) -> None:
        sniffer = Sniffer(default_config)
        # asyncio.run closes the loop the session was created on
        session = asyncio.run(sniffer._get_session())
        assert not session.closed

        sniffer.close()
        assert sniffer._session is None
        assert sniffer._session_loop is None

    def test_close_async_on_same_loop(self, default_config: SnifferConfig) -> None:
        async def run() -> bool:
            sniffer = Sniffer(default_config)
            session = await sniffer._get_session()
            await sniffer.close_async()
            return session.closed

        assert asyncio.run(run())


class TestModuleHelpers:
    """Test the one-call helpers."""

    def test_classify_file(self, png_renamed_to_jpg: Path) -> None:
        assert classify_file(png_renamed_to_jpg) == Recognized("image/png", ("png",))

    def test_classify_file_unknown(self, text_file: Path) -> None:
        assert classify_file(text_file, "text/markdown") == Unknown("text/markdown")

    def test_classify_file_custom_table(
        self, png_renamed_to_jpg: Path, mp4_entry: object
    ) -> None:
        table = SignatureTable([mp4_entry])  # type: ignore[list-item]
        result = classify_file(png_renamed_to_jpg, table=table)
        assert result == Unknown("image/jpeg")

    def test_classify_file_empty_table(self, png_renamed_to_jpg: Path) -> None:
        result = classify_file(png_renamed_to_jpg, table=SignatureTable())
        assert not result.is_recognized

    def test_classify_file_async(self, png_renamed_to_jpg: Path) -> None:
        result = asyncio.run(classify_file_async(png_renamed_to_jpg))
        assert result.mime == "image/png"
