"""
WSGI config for the Empiria admin dashboard.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import json
import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# --- Force-load EB environment vars before Django settings ---
eb_env_path = Path("/opt/elasticbeanstalk/bin/get-config")

if eb_env_path.exists():
    try:
        output = subprocess.check_output([str(eb_env_path), "environment"])
        for k, v in json.loads(output.decode().strip()).items():
            os.environ.setdefault(k, v)
    except (subprocess.CalledProcessError, ValueError):
        logger.exception("Failed to load Elastic Beanstalk environment variables")

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
