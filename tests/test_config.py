import pytest

from build123_bucking import DEFAULT_CONFIG, CutIndicatorConfig, get_config


class TestCutIndicatorConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.target_distance == 6.0
        assert DEFAULT_CONFIG.search_half_size == 0.6
        assert DEFAULT_CONFIG.search_size == pytest.approx(1.2)
        assert DEFAULT_CONFIG.marker_color == (0.7, 0.0, 0.7, 1.0)

    def test_get_config_default(self):
        assert get_config() is DEFAULT_CONFIG

    def test_get_config_overrides(self):
        config = get_config(target_distance=4.0)
        assert config.target_distance == 4.0
        assert config.search_half_size == DEFAULT_CONFIG.search_half_size

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            get_config(cut_depth=1.0)

    @pytest.mark.parametrize("field", ["target_distance", "search_half_size", "marker_scale", "probe_thickness"])
    def test_must_be_positive(self, field):
        with pytest.raises(ValueError):
            CutIndicatorConfig(**{field: 0.0})

    def test_color_must_be_rgba(self):
        with pytest.raises(ValueError):
            CutIndicatorConfig(marker_color=(1.0, 0.0, 0.0))

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.target_distance = 1.0
