"""Client configuration"""

from .config import ClientConfig, Credentials, StreamSettings, credentials_from_env

__all__ = ["ClientConfig", "Credentials", "StreamSettings", "credentials_from_env"]
