"""
Unit tests for the indicator configuration.

Run with:
    python -m pytest tests/test_config.py -v
"""

import json
import logging

import pytest

from streaming_indicators import InvalidParameterError
from streaming_indicators.config import PARAMETER_MAP, IndicatorConfig
from streaming_indicators.core import UnknownIndicatorError
from streaming_indicators.indicators import INDICATORS, MACD, SimpleMovingAverage


class TestDefaults:
    """Default configuration."""

    def test_defaults_validate(self):
        IndicatorConfig().validate()

    def test_every_indicator_is_mapped(self):
        assert set(PARAMETER_MAP) == set(INDICATORS)

    @pytest.mark.parametrize("name", sorted(INDICATORS))
    def test_create_every_indicator(self, name):
        indicator = IndicatorConfig(history=3).create(name)
        assert indicator.history == 3


class TestParams:
    """Building indicators from the config."""

    def test_params_for_macd(self):
        config = IndicatorConfig(macd_fast_period=8)
        assert config.params_for("macd") == {
            'fast_period': 8,
            'slow_period': 26,
            'signal_period': 9,
            'history': 1,
        }

    def test_params_for_no_period(self):
        assert IndicatorConfig(history=2).params_for("obv") == {'history': 2}

    def test_create_with_override(self):
        sma = IndicatorConfig(sma_period=30).create("SMA", period=5)
        assert isinstance(sma, SimpleMovingAverage)
        assert sma.period == 5

    def test_create_uses_defaults(self):
        macd = IndicatorConfig(macd_slow_period=40).create("macd")
        assert isinstance(macd, MACD)
        assert macd.slow_period == 40

    def test_unknown_indicator(self):
        with pytest.raises(UnknownIndicatorError):
            IndicatorConfig().params_for("vwap")


class TestValidation:
    """validate() and from_dict()."""

    def test_zero_period_rejected(self):
        with pytest.raises(InvalidParameterError):
            IndicatorConfig(sma_period=0).validate()

    def test_negative_multiplier_rejected(self):
        with pytest.raises(InvalidParameterError):
            IndicatorConfig(cci_constant=-1.0).validate()

    def test_zero_std_dev_allowed(self):
        IndicatorConfig(bb_std_dev=0.0).validate()

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = IndicatorConfig.from_dict({'rsi_period': 7, 'vwap_period': 3})
        assert config.rsi_period == 7
        assert "vwap_period" in caplog.text

    def test_from_dict_validates(self):
        with pytest.raises(InvalidParameterError):
            IndicatorConfig.from_dict({'history': 0})

    def test_to_dict(self):
        data = IndicatorConfig(adx_period=10).to_dict()
        assert data['adx_period'] == 10
        assert data['history'] == 1


class TestPersistence:
    """JSON save/load."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config" / "indicators.json"
        IndicatorConfig(atr_period=21, bb_std_dev=2.5).save(path)

        with open(path) as f:
            assert json.load(f)['atr_period'] == 21

        loaded = IndicatorConfig.load(path)
        assert loaded == IndicatorConfig(atr_period=21, bb_std_dev=2.5)

    def test_load_missing_file(self, tmp_path):
        assert IndicatorConfig.load(tmp_path / "missing.json") == IndicatorConfig()

    def test_load_corrupt_file(self, tmp_path, caplog):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            assert IndicatorConfig.load(path) == IndicatorConfig()
        assert "Could not load" in caplog.text

    def test_load_directory_path(self, tmp_path):
        assert IndicatorConfig.load(tmp_path) == IndicatorConfig()

    def test_load_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{\x00")
        assert IndicatorConfig.load(path) == IndicatorConfig()

    def test_load_out_of_range(self, tmp_path):
        path = tmp_path / "bad_values.json"
        path.write_text(json.dumps({'mfi_period': -1}))
        with pytest.raises(InvalidParameterError):
            IndicatorConfig.load(path)
