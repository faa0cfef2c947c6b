from dataclasses import dataclass

import yaml

from .exceptions import ConfigError

DEFAULT_VERSION = '2011-08-18'
DEFAULT_TIMEOUT = 30.0
REQUIRED_KEYS = ('account_name', 'account_key')


@dataclass(frozen=True)
class QueueConfig:
    account_name: str
    account_key: str
    queue_name: str
    endpoint: str = None
    version: str = DEFAULT_VERSION
    zone: str = 'GMT'
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.endpoint:
            object.__setattr__(
                self, 'endpoint', f"https://{self.account_name}.queue.core.windows.net"
            )
        object.__setattr__(self, 'endpoint', self.endpoint.rstrip('/'))

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{self.queue_name}/messages"

    @classmethod
    def from_dict(cls, profile: str, conf: dict) -> 'QueueConfig':
        for key in REQUIRED_KEYS:
            if not conf.get(key):
                raise ConfigError(f"Missing '{key}' in config for profile '{profile}'")
        return cls(
            account_name=str(conf['account_name']),
            account_key=str(conf['account_key']),
            queue_name=str(conf.get('queue_name') or profile),
            endpoint=conf.get('endpoint'),
            version=str(conf.get('version') or DEFAULT_VERSION),
            zone=conf.get('zone') or 'GMT',
            timeout=float(conf.get('timeout') or DEFAULT_TIMEOUT),
        )


def load_config(profile: str, config_file: str = ".config.yaml") -> QueueConfig:
    """Load the configuration for a specific profile from the YAML file."""
    try:
        with open(config_file, "r") as f:
            full_config = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Can't read {config_file}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(full_config, dict) or profile not in full_config:
        raise ConfigError(f"Profile '{profile}' not found in {config_file}")

    conf = full_config[profile] or {}
    if not isinstance(conf, dict):
        raise ConfigError(f"Profile '{profile}' in {config_file} is not a mapping")
    return QueueConfig.from_dict(profile, conf)
