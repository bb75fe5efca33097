from farmconnect.services.notification_service import (
    send_order_created_task,
    send_order_status_changed_task,
)


def test_order_created_task_runs_inline():
    assert send_order_created_task(3, 17) == {"user_id": 3, "order_id": 17, "status": "sent"}


def test_status_changed_task_runs_inline():
    result = send_order_status_changed_task(5, 17, "shipped")
    assert result["order_status"] == "shipped"
    assert result["user_id"] == 5
