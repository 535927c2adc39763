# backend/tests/test_notifications.py
"""
Almacén de notificaciones (fakeredis), broker en memoria y servicio.
"""

import asyncio
import logging

from ticket_logger.crud import notification_crud
from ticket_logger.schemas.notification_schema import NotificationCreate
from ticket_logger.services.notification_broker import TopicBroker
from ticket_logger.services.notification_service import NotificationService

TOPIC = "/topic/notifications"


async def _collect(iterator):
    return [item async for item in iterator]


# ========================================
# ALMACÉN
# ========================================

async def test_iter_notifications_keeps_insertion_order(fake_redis):
    for i in range(5):
        await notification_crud.insert_notification({"id": f"n{i}", "subject": str(i), "message": "m", "read": False, "created_at": "2024-01-01T00:00:00+00:00"})

    documents = await _collect(notification_crud.iter_notifications(page_size=2))

    assert [d["id"] for d in documents] == ["n0", "n1", "n2", "n3", "n4"]


async def test_iter_notifications_is_finite_at_call_time(fake_redis):
    await notification_crud.insert_notification({"id": "a", "subject": "s", "message": "m", "read": False, "created_at": "2024-01-01T00:00:00+00:00"})
    iterator = notification_crud.iter_notifications()

    first = await iterator.__anext__()
    await notification_crud.insert_notification({"id": "b", "subject": "s", "message": "m", "read": False, "created_at": "2024-01-01T00:00:00+00:00"})
    rest = await _collect(iterator)

    assert first["id"] == "a"
    assert rest == []
    assert await notification_crud.count_notifications() == 2


# ========================================
# BROKER
# ========================================

async def test_publish_reaches_every_subscriber():
    broker = TopicBroker(publish_timeout=1)
    received = []

    async def subscriber(message):
        received.append(message)

    broker.subscribe(TOPIC, "a", subscriber)
    broker.subscribe(TOPIC, "b", subscriber)
    broker.subscribe("/topic/other", "c", subscriber)

    delivered = await broker.publish(TOPIC, {"subject": "hola"})

    assert delivered == 2
    assert received == [{"subject": "hola"}, {"subject": "hola"}]


async def test_failing_subscriber_does_not_block_the_rest():
    broker = TopicBroker(publish_timeout=1)
    received = []

    async def broken(message):
        raise RuntimeError("socket cerrado")

    async def healthy(message):
        received.append(message)

    broker.subscribe(TOPIC, "roto", broken)
    broker.subscribe(TOPIC, "sano", healthy)

    assert await broker.publish(TOPIC, {"x": 1}) == 1
    assert received == [{"x": 1}]


async def test_unsubscribe_stops_delivery():
    broker = TopicBroker(publish_timeout=1)
    received = []

    async def subscriber(message):
        received.append(message)

    broker.subscribe(TOPIC, "a", subscriber)
    broker.unsubscribe(TOPIC, "a")

    assert await broker.publish(TOPIC, {"x": 1}) == 0
    assert broker.subscriber_count(TOPIC) == 0
    assert received == []


async def test_dispatch_timeout_is_only_logged(caplog):
    broker = TopicBroker(publish_timeout=0.05)

    async def slow(message):
        await asyncio.sleep(1)

    broker.subscribe(TOPIC, "lento", slow)

    with caplog.at_level(logging.ERROR, logger="ticket_logger.services.notification_broker"):
        task = broker.dispatch(TOPIC, {"x": 1})
        await broker.drain()

    assert task.done() and task.exception() is None
    assert any("Timeout" in record.getMessage() for record in caplog.records)


async def test_slow_subscriber_does_not_delay_the_rest():
    broker = TopicBroker(publish_timeout=0.1)
    received = []

    async def slow(message):
        await asyncio.sleep(1)

    async def fast(message):
        received.append(message)

    # El lento se registra primero
    broker.subscribe(TOPIC, "a-lento", slow)
    broker.subscribe(TOPIC, "b-rapido", fast)

    broker.dispatch(TOPIC, {"x": 1})
    await broker.drain()

    assert received == [{"x": 1}]
    assert await broker.publish(TOPIC, {"x": 2}) == 1


# ========================================
# SERVICIO
# ========================================

async def test_save_persists_then_publishes(fake_redis):
    broker = TopicBroker(publish_timeout=1)
    received = []

    async def subscriber(message):
        received.append(message)

    broker.subscribe(TOPIC, "cliente", subscriber)
    service = NotificationService(broker=broker, topic=TOPIC)

    saved = await service.save(NotificationCreate(subject="A", message="B"))
    await broker.drain()

    assert saved.id and saved.read is False
    assert await notification_crud.get_notification(saved.id) is not None
    assert received[0]["id"] == saved.id
    assert (received[0]["subject"], received[0]["message"]) == ("A", "B")


async def test_save_succeeds_when_publish_fails(fake_redis):
    broker = TopicBroker(publish_timeout=1)

    async def broken(message):
        raise RuntimeError("sin conexión")

    broker.subscribe(TOPIC, "roto", broken)
    service = NotificationService(broker=broker, topic=TOPIC)

    saved = await service.save(NotificationCreate(subject="A", message="B"))
    await broker.drain()

    assert [n.id for n in await _collect(service.list_all())] == [saved.id]


async def test_list_all_returns_saved_notifications(fake_redis):
    service = NotificationService(broker=TopicBroker(publish_timeout=1), topic=TOPIC)
    first = await service.save(NotificationCreate(subject="uno", message="1"))
    second = await service.save(NotificationCreate(subject="dos", message="2"))
    await service.broker.drain()

    notifications = await _collect(service.list_all())

    assert [n.id for n in notifications] == [first.id, second.id]
    assert all(n.read is False for n in notifications)
