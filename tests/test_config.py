from personal_color.config import Settings, get_settings


def test_defaults():
    s = Settings()
    assert s.max_delta_e == 12.0
    assert s.min_delta_e_gap == 2.0
    assert s.zone_min_skin_ratio == 0.35
    assert (s.zone_min_skin_count, s.min_skin_samples) == (50, 60)
    assert (s.face_min_aspect, s.face_max_aspect) == (0.5, 1.5)
    assert (s.confidence_floor, s.decisive_confidence, s.confirm_below) == (0.55, 0.65, 0.72)
    assert (s.warm_index_threshold, s.warm_index_span) == (0.08, 0.18)
    assert len(s.detect_zones) == 3
    assert {rule[0] for rule in s.season_rules} == {"spring", "summer", "autumn", "winter"}


def test_environment_override(monkeypatch):
    monkeypatch.setenv("PERSONAL_COLOR_MAX_DELTA_E", "5")
    monkeypatch.setenv("PERSONAL_COLOR_MIN_SKIN_SAMPLES", "80")
    s = Settings()
    assert s.max_delta_e == 5.0
    assert s.min_skin_samples == 80


def test_settings_are_cached():
    assert get_settings() is get_settings()
