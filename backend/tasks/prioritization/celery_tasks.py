# tasks/prioritization/celery_tasks.py

import logging
from typing import Any, Dict, List, Optional
from celery import shared_task
from .orchestrator import PriorityOrchestrator
from .records import MODE_APPLY

# Configure logging for background worker monitoring
logger = logging.getLogger(__name__)


@shared_task(bind=True, ignore_result=False, max_retries=0)
def run_priority_apply(
    self,
    project_id: Optional[str] = None,
    task_ids: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Worker: recompute priorities for the selection and persist confident changes.
    Input = plain selector fields only; the worker fetches everything else.

    Failures are logged and re-raised; there is no automatic retry.
    """
    selector = {}
    if project_id:
        selector["projectId"] = project_id
    if task_ids:
        selector["taskIds"] = list(task_ids)

    logger.info(f"Background priority apply started (celery id {self.request.id})")
    try:
        result = PriorityOrchestrator().analyze_or_apply(selector, MODE_APPLY)
    except Exception as exc:
        logger.exception(f"Background priority apply failed: {exc}")
        raise

    logger.info(
        f"Background priority apply finished: {result['summary']['appliedChanges']} task(s) updated"
    )
    return result
