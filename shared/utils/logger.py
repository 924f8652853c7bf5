"""
Logging utilities for the project tracker

Provides centralized logging configuration for stdlib logging and structlog.
"""

import os
import time
import logging
import logging.config
from typing import Optional, Dict, Any

import structlog
import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    }
}


def _load_config_file(config_path: str) -> Optional[Dict[str, Any]]:
    """Load a YAML dictConfig file, None if it cannot be read"""
    try:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}")
        return None


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    config_path: Optional[str] = None
) -> None:
    """
    Setup logging configuration

    Args:
        service_name: Bound into every structlog event
        log_level: Override log level
        log_format: 'default', 'detailed' or 'json'
        config_path: Path to a YAML logging configuration file
    """
    config = None
    if config_path and os.path.exists(config_path):
        config = _load_config_file(config_path)

    if not config:
        config = {
            **DEFAULT_LOGGING_CONFIG,
            'handlers': {k: dict(v) for k, v in DEFAULT_LOGGING_CONFIG['handlers'].items()},
            'root': dict(DEFAULT_LOGGING_CONFIG['root']),
        }

        if log_level:
            log_level = log_level.upper()
            config['root']['level'] = log_level
            for handler_config in config['handlers'].values():
                handler_config['level'] = log_level

        if log_format and log_format in config['formatters']:
            for handler_config in config['handlers'].values():
                handler_config['formatter'] = log_format

    logging.config.dictConfig(config)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == 'json'
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    def add_service_name(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    structlog.configure(
        processors=[
            add_service_name,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def log_requests(request, call_next):
    """HTTP middleware logging every request with its status and duration"""
    request_logger = structlog.get_logger("requests")
    started = time.perf_counter()
    response = await call_next(request)
    request_logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2)
    )
    return response
