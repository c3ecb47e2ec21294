# stock_tracker/utils/audit.py
import logging

logger = logging.getLogger("stock_tracker.audit")

def write_log(*, user_id=None, action, resource, status="SUCCESS", meta=None):
    level = logging.INFO if status == "SUCCESS" else logging.WARNING
    logger.log(
        level, "%s %s status=%s user=%s meta=%s",
        action, resource, status, user_id, meta or {},
        extra={"action": action, "resource": resource, "status": status, "user_id": user_id, "meta": meta or {}},
    )
