import os

basedir = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default="1"):
    return (os.environ.get(name, default) or "").strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-key')

    # Спочатку пробуємо власну змінну, потім стандартну (Render/Heroku)
    uri = os.environ.get('ERP_DATABASE_URL') or os.environ.get('DATABASE_URL')

    if uri and uri.startswith('postgresql://'):
        uri = uri.replace('postgresql://', 'postgresql+psycopg://', 1)

    SQLALCHEMY_DATABASE_URI = uri or f"sqlite:///{os.path.join(basedir, 'instance', 'erp.db')}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JSON API: CSRF-токени не використовуються
    WTF_CSRF_ENABLED = False

    SEED_DEMO_DATA = _env_flag('ERP_SEED_DEMO')
    LOG_LEVEL = os.environ.get('ERP_LOG_LEVEL', 'INFO').upper()
    LOW_STOCK_THRESHOLD = float(os.environ.get('ERP_LOW_STOCK_THRESHOLD', '5'))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SEED_DEMO_DATA = False
    LOG_LEVEL = "DEBUG"
