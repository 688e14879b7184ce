import itertools


class ScheduledTask:
    def __init__(self, scheduler, due_ms, callback, interval_ms=None):
        self._scheduler = scheduler
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    def cancel(self):
        if not self.cancelled:
            self.cancelled = True
            self._scheduler._discard(self)

    @property
    def active(self):
        return not self.cancelled


class Scheduler:
    """
    Cooperative timer queue advanced by the frame loop.

    Nothing runs on its own: `update(dt_ms)` moves the virtual clock forward and
    fires every task that has come due, ordered by due time and then by the order
    the tasks were scheduled. A cancelled task never fires, including when it is
    cancelled by another callback during the same update.
    """

    def __init__(self):
        self.now_ms = 0.0
        self._tasks = {}
        self._counter = itertools.count()

    def schedule_after(self, delay_ms, callback):
        return self._add(ScheduledTask(self, self.now_ms + max(0, delay_ms), callback))

    def schedule_interval(self, interval_ms, callback):
        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        return self._add(ScheduledTask(self, self.now_ms + interval_ms, callback, interval_ms=interval_ms))

    def _add(self, task):
        self._tasks[task] = next(self._counter)
        return task

    def _discard(self, task):
        self._tasks.pop(task, None)

    def pending(self):
        return len(self._tasks)

    def cancel_all(self):
        for task in list(self._tasks):
            task.cancel()

    def update(self, dt_ms):
        target = self.now_ms + max(0, dt_ms)
        while True:
            due = [(t.due_ms, order, t) for t, order in self._tasks.items() if t.due_ms <= target]
            if not due:
                break
            due_ms, _, task = min(due, key=lambda item: (item[0], item[1]))
            self.now_ms = max(self.now_ms, due_ms)
            if task.interval_ms is None:
                self._discard(task)
                task.cancelled = True
            else:
                task.due_ms += task.interval_ms
                self._tasks[task] = next(self._counter)
            task.callback()
        self.now_ms = target
