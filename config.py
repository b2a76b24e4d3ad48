import os

class Config:
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-key'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Bit sequence optimizer
    OPTIMIZER_METHOD = os.environ.get('OPTIMIZER_METHOD', 'dp')
    OPTIMIZER_RESOLUTION = float(os.environ.get('OPTIMIZER_RESOLUTION', 1.0))  # meters
    OPTIMIZER_MAX_RUNS = int(os.environ.get('OPTIMIZER_MAX_RUNS', 12))  # exhaustive search cap
    OPTIMIZER_MAX_STATES = int(os.environ.get('OPTIMIZER_MAX_STATES', 200000))  # grid states or sequences per request

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()

class TestingConfig(Config):
    TESTING = True

class ProductionConfig(Config):
    pass

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
