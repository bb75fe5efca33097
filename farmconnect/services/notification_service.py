# farmconnect/services/notification_service.py
from farmconnect.celery_worker import celery_app
from farmconnect.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Queues order notifications on Celery so the request does not wait on
    the delivery channel.
    """

    @staticmethod
    def send_order_created(farmer_id: int, order_id: int):
        send_order_created_task.delay(farmer_id, order_id)

    @staticmethod
    def send_order_status_changed(buyer_id: int, order_id: int, status: str):
        send_order_status_changed_task.delay(buyer_id, order_id, status)


@celery_app.task(name="farmconnect.services.notification_service.send_order_created_task")
def send_order_created_task(farmer_id: int, order_id: int):
    """Tells the farmer a new order is waiting for confirmation."""
    logger.info(f"[NOTIFICATION] Farmer {farmer_id}: new order {order_id} waiting for confirmation")
    return {"user_id": farmer_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="farmconnect.services.notification_service.send_order_status_changed_task")
def send_order_status_changed_task(buyer_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] Buyer {buyer_id}: order {order_id} is now {status}")
    return {"user_id": buyer_id, "order_id": order_id, "order_status": status, "status": "sent"}
