import pytest

from app.config import ConfigError, load_config


def test_minimal_secrets_use_defaults():
    cfg = load_config({"supabase": {"url": "https://x.supabase.co", "anon_key": "k"}})

    assert cfg.supabase.url == "https://x.supabase.co"
    assert cfg.supabase.anon_key == "k"
    assert cfg.business.whatsapp_number == "5514998742493"
    assert cfg.business.timezone == "America/Sao_Paulo"
    assert cfg.storage.bookings_table == "agendamentos"
    assert cfg.storage.photo_bucket == "agendamento-fotos"
    assert cfg.logging.level == "INFO"
    assert cfg.logging.json is False


def test_overrides_and_unknown_keys():
    cfg = load_config({
        "supabase": {"url": "u", "key": "legacy"},
        "business": {
            "name": "Zé Reparos", "whatsapp_number": 5511900000000,
            "timezone": "America/Manaus", "color": "red",
        },
        "storage": {"photo_bucket": "fotos"},
        "logging": {"level": "debug", "json": True},
    })

    assert cfg.supabase.anon_key == "legacy"
    assert cfg.business.name == "Zé Reparos"
    assert cfg.business.whatsapp_number == "5511900000000"
    assert cfg.business.tagline == "Marido de Aluguel"
    assert cfg.business.timezone == "America/Manaus"
    assert cfg.storage.photo_bucket == "fotos"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.json is True


@pytest.mark.parametrize("secrets", [
    {},
    {"supabase": {"url": "u"}},
    {"supabase": {"anon_key": "k"}},
])
def test_missing_supabase_credentials(secrets):
    with pytest.raises(ConfigError):
        load_config(secrets)
