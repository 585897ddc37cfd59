"""
Tests for the plazoo CLI.
"""

import logging

import pytest
from sqlalchemy import inspect
from typer.testing import CliRunner

from plazoo_base.db import get_engine, get_sessionmaker
from plazoo_core.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI callback reconfigures the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sqlite_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'plazoo.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_engine.cache_clear()
    get_sessionmaker.cache_clear()
    yield url
    get_engine().dispose()
    get_engine.cache_clear()
    get_sessionmaker.cache_clear()


class TestThemeCommand:
    def test_prints_variables(self):
        result = runner.invoke(app, ["theme", "#FF0000", "ffff00"])

        assert result.exit_code == 0
        assert "--store-primary: 0 100% 50%;" in result.output
        assert "--store-secondary: 60 100% 50%;" in result.output
        assert "--store-secondary-foreground: 0 0% 0%;" in result.output

    def test_invalid_color(self):
        result = runner.invoke(app, ["theme", "vermelho"])

        assert result.exit_code == 0
        assert "Ignoring invalid primary_color" in result.output
        assert "--store-primary" not in result.output


class TestCombinationsCommand:
    def test_lists_combinations(self):
        result = runner.invoke(app, ["combinations", "--axis", "cor=Azul,Preto", "--axis", "tamanho=P,M"])

        assert result.exit_code == 0
        assert "4 combinations" in result.output
        assert "Preto" in result.output

    def test_no_axes(self):
        result = runner.invoke(app, ["combinations"])

        assert result.exit_code == 0
        assert "simple product" in result.output

    def test_malformed_axis(self):
        result = runner.invoke(app, ["combinations", "--axis", "cor"])

        assert result.exit_code != 0


class TestQuoteCommand:
    def test_quote_with_discount(self):
        result = runner.invoke(
            app,
            ["quote", "--item", "10:2", "--item", "5+1.5*2", "--discount", "10"],
        )

        assert result.exit_code == 0
        assert "Subtotal: R$ 28,00" in result.output
        assert "Total: R$ 25,20" in result.output

    def test_fixed_discount(self):
        result = runner.invoke(
            app,
            ["quote", "--item", "10", "--discount", "15", "--discount-type", "fixed"],
        )

        assert result.exit_code == 0
        assert "Total: R$ 0,00" in result.output

    def test_invalid_discount_type(self):
        result = runner.invoke(app, ["quote", "--item", "10", "--discount", "5", "--discount-type", "bogo"])

        assert result.exit_code == 1

    def test_invalid_price(self):
        result = runner.invoke(app, ["quote", "--item", "dez"])

        assert result.exit_code == 1


class TestInitDbCommand:
    def test_creates_tables(self, sqlite_url):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        tables = set(inspect(get_engine()).get_table_names())
        assert {"stores", "user_roles", "orders", "order_items", "order_item_add_ons"} <= tables
