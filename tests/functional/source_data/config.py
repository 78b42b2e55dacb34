"""Configuration with some immutable fields."""


class Config:
    # +const
    api_key: str = ""

    timeout: int = 30

    @classmethod
    def make(cls) -> "Config":
        c = cls()
        c.api_key = "secret"
        c.timeout = 30
        return c


def init_config(api_key: str) -> Config:
    config = Config()
    config.api_key = api_key
    return config


def update_config(c: Config) -> None:
    c.api_key = "new-secret"  # want: const-field-assignment
    c.timeout = 60


def reset_defaults() -> None:
    Config.api_key = ""  # want: const-field-assignment
    Config.timeout = 30


class Settings:
    def __init__(self, path: str) -> None:
        self.path = path  # +const
        self.loaded = False

    def load(self) -> None:
        self.loaded = True
        self.path = self.path.strip()  # want: const-field-assignment


class ReloadableSettings(Settings):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path.lower()

    def reload(self, path: str) -> None:
        self.path = path  # want: const-field-assignment
