"""Tests for the command-line entry point."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from realestate_api import main as main_module
from realestate_api.config import Settings
from realestate_api.db import RealEstateStorage


class TestMain:
    def test_seed_flag_seeds_and_exits(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        db_path = tmp_path / "cli.db"
        monkeypatch.setenv("REALESTATE_DATABASE_PATH", str(db_path))
        monkeypatch.setattr(sys, "argv", ["realestate-api", "--seed"])

        with patch("uvicorn.run") as run:
            main_module.main()

        run.assert_not_called()
        assert db_path.exists()

    def test_default_starts_server(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REALESTATE_DATABASE_PATH", ":memory:")
        monkeypatch.setenv("REALESTATE_WEB_PORT", "8123")
        monkeypatch.setattr(sys, "argv", ["realestate-api", "--debug"])

        with patch("uvicorn.run") as run:
            main_module.main()

        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 8123


class TestRunSeed:
    @pytest.mark.asyncio
    async def test_closes_storage(self, tmp_path: Path) -> None:
        settings = Settings(database_path=str(tmp_path / "seed.db"))
        close = MagicMock()
        original_close = RealEstateStorage.close

        async def tracking_close(self: RealEstateStorage) -> None:
            close()
            await original_close(self)

        with patch.object(RealEstateStorage, "close", tracking_close):
            await main_module.run_seed(settings)

        close.assert_called_once()

        check = RealEstateStorage(settings.database_path)
        try:
            await check.initialize()
            assert len(await check.owners.list_all()) == 5
        finally:
            await check.close()
