import os

# ==================== CONFIGURATION ====================

DEFAULT_DUMMY_ROWS = 1000
DEFAULT_SEED = 42
DEFAULT_TABLE = 'mock_data'
INSERT_BATCH_SIZE = 1000


def _env_port(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"MYSQL_PORT must be an integer, got {value!r}")


def get_mysql_config(**overrides) -> dict:
    """Build the connection dict from the environment, then apply overrides.

    Overrides set to None are ignored so argparse defaults can be passed
    straight through.
    """
    config = {
        'host': os.environ.get('MYSQL_HOST', '127.0.0.1'),
        'port': _env_port(os.environ.get('MYSQL_PORT', '3306')),
        'user': os.environ.get('MYSQL_USER', 'root'),
        'password': os.environ.get('MYSQL_PASSWORD', ''),
        'database': os.environ.get('MYSQL_DATABASE', 'sandbox'),
        'allow_local_infile': True,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    if 'port' in overrides and overrides['port'] is not None:
        config['port'] = _env_port(overrides['port'])
    return config
