from voicenav.router.models import Coord
from voicenav.router.nav_config import NavConfig


def test_defaults():
    config = NavConfig()
    assert config.walking_speed_mps == 1.4
    assert config.default_position == Coord(11.0168, 76.9558)


def test_from_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("VOICENAV_EMERGENCY_URL", "https://alerts.example/api/emergency")
    monkeypatch.setenv("VOICENAV_WALKING_SPEED_MPS", "1.2")
    monkeypatch.setenv("VOICENAV_SPEECH_RATE", "170")
    config = NavConfig.from_env(str(tmp_path / "missing.env"))

    assert config.emergency_url == "https://alerts.example/api/emergency"
    assert config.walking_speed_mps == 1.2
    assert config.speech_rate == 170
    assert config.language == "en-US"


def test_from_env_reads_dotenv_file(monkeypatch, tmp_path):
    # registered so the value load_dotenv writes is removed on teardown
    monkeypatch.setenv("VOICENAV_LOG_DIR", "unset")
    monkeypatch.delenv("VOICENAV_LOG_DIR")
    env_file = tmp_path / ".env"
    env_file.write_text("VOICENAV_LOG_DIR=nav_logs\n")
    config = NavConfig.from_env(str(env_file))

    assert config.log_dir == "nav_logs"
    assert config.route_filepath.startswith("nav_logs")


def test_from_env_ignores_malformed_numbers(monkeypatch, tmp_path, caplog):
    monkeypatch.setenv("VOICENAV_SPEECH_RATE", "150.0")
    monkeypatch.setenv("VOICENAV_WALKING_SPEED_MPS", "fast")
    monkeypatch.setenv("VOICENAV_LANGUAGE", "en-GB")
    with caplog.at_level("WARNING"):
        config = NavConfig.from_env(str(tmp_path / "missing.env"))

    assert config.speech_rate == NavConfig().speech_rate
    assert config.walking_speed_mps == 1.4
    assert config.language == "en-GB"
    assert "VOICENAV_SPEECH_RATE" in caplog.text
    assert "VOICENAV_WALKING_SPEED_MPS" in caplog.text
