import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


ENV_PREFIX = 'POCATALOG_'


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [x.strip() for x in value.split(',') if x.strip()]


@dataclass(frozen=True)
class Settings:
    translations_dir: Path = Path('translations')
    domain: str = 'messages'
    reference_locale: str = 'en'
    exclude_locales: list[str] = field(default_factory=list)
    encoding: str = 'utf-8'
    log_level: str = 'WARNING'

    def catalog_path(self, locale: str) -> Path:
        return self.translations_dir / locale / 'LC_MESSAGES' / f'{self.domain}.po'


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Build Settings from the environment.

    A .env file (the given one, or one in the working directory) is read
    first; variables already set in the environment are not overridden.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv(os.path.join(os.getcwd(), '.env'))

    def get(name: str, default: str) -> str:
        value = os.environ.get(ENV_PREFIX + name)
        if value is None or not value.strip():
            return default
        return value.strip()

    return Settings(
        translations_dir=Path(get('TRANSLATIONS_DIR', 'translations')),
        domain=get('DOMAIN', 'messages'),
        reference_locale=get('REFERENCE_LOCALE', 'en'),
        exclude_locales=_split_list(os.environ.get(ENV_PREFIX + 'EXCLUDE_LOCALES')),
        encoding=get('ENCODING', 'utf-8'),
        log_level=get('LOG_LEVEL', 'WARNING').upper(),
    )
