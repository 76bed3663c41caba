import json
from pathlib import Path

from core.errors import ConfigError

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class NonceConfig:
    __slots__ = ("default_length", "alphabet", "max_length", "max_batch", "rollback_warn_s")

    def __init__(self, default_length=32, alphabet="sortable", max_length=1024, max_batch=100, rollback_warn_s=1.0):
        self.default_length = default_length
        self.alphabet = alphabet
        self.max_length = max_length
        self.max_batch = max_batch
        self.rollback_warn_s = rollback_warn_s

    def validate(self):
        # imported here so config.py stays importable on its own
        from textnonce.encoding import ALPHABETS, validate_length

        if self.alphabet not in ALPHABETS:
            raise ConfigError(f"unknown alphabet {self.alphabet!r}", field="alphabet")
        try:
            validate_length(self.default_length)
        except ValueError as exc:
            raise ConfigError(f"invalid default_length {self.default_length!r}", field="default_length", cause=exc) from exc
        if self.max_length < self.default_length:
            raise ConfigError("max_length must be >= default_length", field="max_length")
        if self.max_batch < 1:
            raise ConfigError("max_batch must be >= 1", field="max_batch")
        return self


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("nonce", "server", "logging")

    def __init__(self, nonce=None, server=None, logging=None):
        self.nonce = nonce or NonceConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            NonceConfig(**d.get("nonce", {})).validate(),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
