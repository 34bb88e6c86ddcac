"""
Service context for log lines.

Identifies which process produced a log line: `<service>@<env>:<instance>`.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'eventhub-api')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers expose a short hostname; fall back to the PID locally
    instance = os.getenv('HOSTNAME') or socket.gethostname()
    if deploy_env == 'local_dev' or not instance:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
