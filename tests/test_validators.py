"""
Tests for form validation helpers and configuration
"""

import logging
from datetime import date
from pathlib import Path

from brewboard.config import Config
from brewboard.utils.validators import (
    ProductValidator,
    ValidationResult,
    coerce_number,
    is_valid_url,
    parse_iso_date,
    validate_cost_entry,
    validate_login,
    validate_product_draft,
)


def test_validation_result_tracks_first_field_error():
    result = ValidationResult()
    result.add_error("first", "name")
    result.add_error("second", "name")
    result.add_warning("careful")
    assert not result.is_valid
    assert result.field_errors == {"name": "first"}
    assert result.to_dict()['warnings'] == ["careful"]


def test_coerce_number():
    assert coerce_number(" 4.5 ") == 4.5
    assert coerce_number(3) == 3.0
    assert coerce_number("") is None
    assert coerce_number("abc") is None
    assert coerce_number("nan") is None
    assert coerce_number(True) is None


def test_is_valid_url():
    assert is_valid_url("https://example.com/a.png")
    assert not is_valid_url("example.com")
    assert not is_valid_url("ftp://example.com")


def test_parse_iso_date():
    assert parse_iso_date("2026-10-19") == date(2026, 10, 19)
    assert parse_iso_date("2026-10-19T08:00:00") == date(2026, 10, 19)
    assert parse_iso_date(date(2026, 1, 1)) == date(2026, 1, 1)
    assert parse_iso_date("19/10/2026") is None


def test_product_validator_accepts_valid_form():
    result = ProductValidator().validate({
        'name': "Latte", 'category': "Coffee", 'price': 0, 'sku': "L1", 'stock': "0",
    })
    assert result.is_valid
    assert result.values['stock'] == 0


def test_product_validator_messages():
    result = ProductValidator().validate({})
    assert result.field_errors['name'] == "Enter a product name"
    assert result.field_errors['category'] == "Choose a category"
    assert result.field_errors['price'] == "Price must be >= 0"
    assert result.field_errors['sku'] == "SKU is required"
    assert result.field_errors['stock'] == "Stock must be >= 0"


def test_validate_cost_entry():
    ok = validate_cost_entry(date(2026, 10, 19), "99.9", "  Beans ")
    assert ok.is_valid
    assert ok.values == {"date": date(2026, 10, 19), "amount": 99.9, "note": "Beans"}
    assert not validate_cost_entry("", "1").is_valid


def test_validate_login():
    assert validate_login("a@b.co", "pw").is_valid
    assert not validate_login("@b.co", "pw").is_valid
    assert not validate_login("a@", "pw").is_valid


def test_validate_product_draft_blank_prices():
    result = validate_product_draft("Mocha", {"Small": "", "Large": None})
    assert result.is_valid
    assert result.values['prices'] == {"Small": None, "Large": None}


class TestConfig:

    def test_from_workspace(self, tmp_path):
        config = Config.from_workspace(str(tmp_path))
        assert config.data_path == tmp_path / 'data'
        assert config.storage_file == tmp_path / 'data' / 'local_storage.json'
        assert config.log_file == tmp_path / 'outputs' / 'brewboard.log'

    def test_string_paths_converted(self):
        config = Config(data_path="somewhere")
        assert isinstance(config.data_path, Path)
        assert config.storage_file == Path("somewhere") / 'local_storage.json'

    def test_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv('BREWBOARD_HOME', str(tmp_path))
        monkeypatch.setenv('BREWBOARD_LOG_LEVEL', 'debug')
        config = Config.from_env()
        assert config.data_path == tmp_path / 'data'
        assert config.log_level == logging.DEBUG

    def test_priority_thresholds_sorted(self):
        labels = [label for label, _ in Config().feedback.priority_thresholds()]
        assert labels == ['Critical', 'High', 'Medium']
