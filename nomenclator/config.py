import os


DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


class Config:
    # Storage
    DATABASE_FILE = os.getenv('NOMENCLATOR_DB', 'nomenclator.db')
    STORE_TIMEOUT = float(os.getenv('NOMENCLATOR_STORE_TIMEOUT', '5'))

    # Logging
    LOG_FILE = os.getenv('NOMENCLATOR_LOG', 'nomenclator.log')

    # Run
    KEY_COUNT = int(os.getenv('NOMENCLATOR_KEY_COUNT', '100'))
    MAX_NAME_RETRIES = 1000

    # JSON export
    JSON_OUT = os.getenv('NOMENCLATOR_JSON_OUT', 'false').lower() == 'true'
    JSON_FILE = os.getenv('NOMENCLATOR_JSON', 'nomenclator.json')

    # Word lists (local variant)
    ADJECTIVES_FILE = os.getenv('NOMENCLATOR_ADJECTIVES', os.path.join(DATA_DIR, 'adjectives.txt'))
    NOUNS_FILE = os.getenv('NOMENCLATOR_NOUNS', os.path.join(DATA_DIR, 'nouns.txt'))

    # Name source (remote variant)
    NAME_SOURCE_URL = os.getenv('NOMENCLATOR_NAME_SOURCE_URL', '')
    NAME_SOURCE_TIMEOUT = float(os.getenv('NOMENCLATOR_NAME_SOURCE_TIMEOUT', '10'))

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if value is None:
                continue
            attr = key.upper()
            if not hasattr(self, attr):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, attr, value)

    @property
    def use_name_source(self) -> bool:
        return bool(self.NAME_SOURCE_URL)


class LocalConfig(Config):
    NAME_SOURCE_URL = ''


class RemoteConfig(Config):
    NAME_SOURCE_URL = os.getenv('NOMENCLATOR_NAME_SOURCE_URL', 'http://localhost:8080/name')


class TestingConfig(Config):
    DATABASE_FILE = 'test-nomenclator.db'
    LOG_FILE = 'test-nomenclator.log'
    KEY_COUNT = 10
    NAME_SOURCE_URL = ''
    NAME_SOURCE_TIMEOUT = 1.0
    STORE_TIMEOUT = 1.0


config = {
    'local': LocalConfig,
    'remote': RemoteConfig,
    'testing': TestingConfig,
    'default': Config
}
