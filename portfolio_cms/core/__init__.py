"""
Portfolio CMS Core
==================

Configuration, backend client, storage and activity logging shared by the
portfolio modules.
"""

from .config import Config, get_config_value
from .data_service import DataService, DataServiceError, get_data_service
from .logging_service import LoggingService, logger

__all__ = ['Config', 'get_config_value', 'DataService', 'DataServiceError',
           'get_data_service', 'LoggingService', 'logger']
