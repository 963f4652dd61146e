import json
import logging
from pathlib import Path

from celery import shared_task
from celery.result import AsyncResult
from django.conf import settings
from django.utils import timezone

from .services.bulk_generator import BulkTranslationGenerator, ensure_default_languages, ensure_default_tags
from .services.export_cache import ExportCache

logger = logging.getLogger(__name__)

GENERATE_TRANSLATIONS_TASK = "generate_translations_task"
FINISHED_STATES = {"SUCCESS", "FAILURE"}

# task name -> last run record; one entry per task, the latest run wins
STATUS_FILE = Path(settings.BASE_DIR) / "task_status.json"


def read_statuses():
    path = Path(STATUS_FILE)
    if not path.exists():
        return {}
    return json.loads(path.read_text())


def write_statuses(data):
    Path(STATUS_FILE).write_text(json.dumps(data, indent=2))


def register_task(task_name: str, task_id: str):
    """Record a freshly queued run, replacing whatever the previous run left behind."""
    data = read_statuses()
    data[task_name] = {
        "task_id": task_id,
        "status": "PENDING",
        "queued_at": timezone.now().isoformat(),
        "stage": None,
        "progress": None,
        "last_run": None,
    }
    write_statuses(data)


def update_task_status(task_name: str, task_id: str, status: str, **details):
    data = read_statuses()
    record = data.setdefault(task_name, {})
    record.update(details, task_id=task_id, status=status)
    if status in FINISHED_STATES:
        record["last_run"] = timezone.now().isoformat()
    write_statuses(data)


@shared_task(bind=True)
def generate_translations_task(self, count: int, batch_size: int = 1000):
    """Run the bulk generator in a worker, recording each finished stage in the status file."""
    task_id = self.request.id
    update_task_status(GENERATE_TRANSLATIONS_TASK, task_id, "STARTED")

    def on_progress(event):
        # one write per finished stage, not per batch
        if event.done == event.total:
            update_task_status(
                GENERATE_TRANSLATIONS_TASK, task_id, "STARTED",
                stage=event.stage, progress={"done": event.done, "total": event.total},
            )

    try:
        generator = BulkTranslationGenerator(batch_size=batch_size, progress=on_progress, cache=ExportCache())
        result = generator.generate(count, ensure_default_languages(), ensure_default_tags())
    except Exception:
        logger.exception("Translation generation task %s failed", task_id)
        update_task_status(GENERATE_TRANSLATIONS_TASK, task_id, "FAILURE")
        raise

    summary = result.model_dump()
    update_task_status(GENERATE_TRANSLATIONS_TASK, task_id, "SUCCESS", result=summary)
    return summary


def get_tasks_status():
    """
    Status of every task that has been queued at least once. ``state`` comes from the
    Celery result backend, the other fields from the status file.
    """
    statuses = {}
    for task_name, record in read_statuses().items():
        task_id = record.get("task_id")
        result = AsyncResult(task_id) if task_id else None
        statuses[task_name] = {
            "task_id": task_id,
            "state": result.state if result else "UNKNOWN",
            "status": record.get("status"),
            "result": record.get("result"),
            "date_done": getattr(result, "date_done", None) if result else None,
            "queued_at": record.get("queued_at"),
            "last_run": record.get("last_run"),
            "stage": record.get("stage"),
            "progress": record.get("progress"),
        }
    return statuses
