"""
Configuration and logging setup
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables
load_dotenv()

DEFAULT_PORT = 2638
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class DatabaseSettings:
    """Connection settings for a SQL Anywhere server"""
    host: str
    user: str
    password: str
    database: str
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'DatabaseSettings':
        """Build settings from SQLANY_* environment variables"""
        env = os.environ if environ is None else environ
        values = {
            'host': env.get('SQLANY_HOST'),
            'user': env.get('SQLANY_USER'),
            'password': env.get('SQLANY_PASSWORD'),
            'database': env.get('SQLANY_DB'),
        }
        missing = [key for key, value in values.items() if not value]
        if missing:
            raise ValueError(f"Missing SQL Anywhere configuration: {', '.join(missing)}")
        return cls(port=int(env.get('SQLANY_PORT', DEFAULT_PORT)), **values)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'DatabaseSettings':
        return cls(
            host=config['host'],
            user=config['user'],
            password=config['password'],
            database=config['database'],
            port=int(config.get('port') or DEFAULT_PORT),
        )

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for the sqlalchemy-sqlany dialect"""
        return URL.create(
            'sqlalchemy_sqlany',
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Setup logging"""
    logger = logging.getLogger(name)
    logger.setLevel(level or os.getenv('SQLANY_LOG_LEVEL', 'INFO'))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
