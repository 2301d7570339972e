"""
Service context for log lines: `{service}@{env}:{instance}` so interleaved output
from several API processes sharing one database can be told apart.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'device-reservation')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are already unique per replica; locally fall back to the PID
    instance = os.getenv('HOSTNAME') or f'{socket.gethostname()}-{os.getpid()}'

    return f'{service_name}@{deploy_env}:{instance}'
