from celery import Celery
from celery.schedules import crontab
from celery.signals import task_failure, task_success
from kombu import Exchange, Queue
from loguru import logger

from stockdigest.core.config import digest_settings

# Celery 앱 초기화
celery = Celery(
    "stockdigest_worker",
    broker=digest_settings.CELERY_BROKER_URL,
    backend=digest_settings.CELERY_RESULT_BACKEND,
    include=[
        "stockdigest.workers.digest_tasks",
    ]
)


@task_success.connect
def handle_task_success(sender=None, **kwargs):
    """태스크 성공 시 처리"""
    if sender and hasattr(sender, 'request'):
        logger.info(f"Task {sender.request.id} completed successfully")


@task_failure.connect
def handle_task_failure(sender=None, exception=None, **kwargs):
    """태스크 실패 시 처리"""
    if sender and hasattr(sender, 'request'):
        logger.error(f"Task {sender.request.id} failed: {str(exception)}")


# Exchange / 큐 정의
telegram_exchange = Exchange('telegram-processing', type='direct')

celery.conf.task_queues = [
    Queue('telegram-processing', telegram_exchange, routing_key='telegram-processing'),
]

celery.conf.task_routes = {
    "stockdigest.workers.digest_tasks.*": {
        "queue": "telegram-processing",
        "routing_key": "telegram-processing"
    },
}

# Celery 설정
celery.conf.broker_connection_retry_on_startup = True
celery.conf.update(
    timezone="Asia/Seoul",  # 서울 시간으로 설정
    enable_utc=False,

    # 워커 설정
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,

    # 태스크 설정
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    task_track_started=True,
    task_time_limit=300,  # 5분
    task_soft_time_limit=240,
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # 결과 설정
    result_expires=3600,

    # 로깅 설정
    worker_redirect_stdouts=False,
)

# 스케줄러 설정
celery.conf.beat_schedule = {
    # 장마감 시황은 보통 오후 늦게 여러 번에 나눠 올라온다
    'compile-daily-digest': {
        'task': 'stockdigest.workers.digest_tasks.compile_daily_digest',
        'schedule': crontab(hour='16-23', minute='*/30', day_of_week='mon-fri'),
    },
}
