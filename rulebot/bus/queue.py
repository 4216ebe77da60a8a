"""Async notification queue between the reminder scheduler and transports."""

# 模块作用：提醒通知总线，连接提醒调度器与下游传输通道
# 设计目的：基于asyncio.Queue实现生产者-消费者模式，支持订阅分发
import asyncio
from typing import Awaitable, Callable

from loguru import logger

from rulebot.types import ReminderNotification


# 作用：通知总线核心类，缓存已触发的提醒并分发给订阅者
# 设计目的：publish为同步方法，可直接作为调度器的sink使用
class NotificationBus:
    """
    Queue of fired reminders for an async consumer.

    ``publish`` is synchronous so it can be passed directly as the
    scheduler's sink; transports either ``consume`` notifications one by one
    or ``subscribe`` callbacks and run ``dispatch`` as a background task.
    """

    # 作用：初始化队列与订阅者列表
    def __init__(self):
        self.queue: asyncio.Queue[ReminderNotification] = asyncio.Queue()
        self._subscribers: list[Callable[[ReminderNotification], Awaitable[None]]] = []
        self._running = False

    # 作用：发布已触发的提醒（调度器 -> 总线）
    # 设计目的：非阻塞入队，可在定时器回调中直接调用
    def publish(self, notification: ReminderNotification) -> None:
        """Enqueue a fired reminder."""
        self.queue.put_nowait(notification)

    # 作用：消费下一条通知，队列为空时等待
    async def consume(self) -> ReminderNotification:
        """Next notification (blocks until available)."""
        return await self.queue.get()

    # 作用：注册通知回调
    def subscribe(self, callback: Callable[[ReminderNotification], Awaitable[None]]) -> None:
        self._subscribers.append(callback)

    # 作用：分发循环，将通知推送给所有订阅者
    # 设计目的：单个订阅者出错只记录日志，不影响其他订阅者
    async def dispatch(self) -> None:
        """
        Deliver queued notifications to subscribers.
        Run this as a background task.
        """
        self._running = True
        while self._running:
            try:
                notification = await asyncio.wait_for(self.queue.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            for callback in self._subscribers:
                try:
                    await callback(notification)
                except Exception as e:
                    logger.error(f"Error dispatching reminder {notification.reminder_id}: {e}")

    # 作用：停止分发循环
    def stop(self) -> None:
        """Stop the dispatcher loop."""
        self._running = False

    @property
    def size(self) -> int:
        """Number of undelivered notifications."""
        return self.queue.qsize()
