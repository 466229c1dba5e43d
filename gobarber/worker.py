"""
arq worker for asynchronous jobs.

Run with:
    arq gobarber.worker.WorkerSettings
"""

import logging
import os

from gobarber.jobs.cancellation_mail import cancellation_mail_task
from gobarber.lib.queue import get_redis_settings

logger = logging.getLogger(__name__)


class WorkerSettings:
    functions = [cancellation_mail_task]
    redis_settings = get_redis_settings()

    max_jobs = int(os.getenv('ARQ_MAX_JOBS', '10'))
    job_timeout = int(os.getenv('ARQ_JOB_TIMEOUT', '60'))
    keep_result = int(os.getenv('ARQ_KEEP_RESULT', '3600'))

    max_tries = 3

    @staticmethod
    async def on_startup(_ctx) -> None:
        logger.info('Mail worker started')
