import copy
import fnmatch

import pytest
import redis
from fastapi.testclient import TestClient

from mobile_metrics.api.routes import metrics as metrics_routes
from mobile_metrics.main import app, get_pingable
from mobile_metrics.services import metrics_store, redis_queue

INIT_PAYLOAD = {
    "clientId": "453de7432",
    "type": "init",
    "timestamp": 1520853523661,
    "data": {
        "app": {"appId": "com.example.someApp", "sdkVersion": "2.4.6", "appVersion": "256"},
        "device": {"platform": "android", "platformVersion": "27"},
    },
}

SECURITY_PAYLOAD = {
    "clientId": "453de7432",
    "type": "security",
    "timestamp": "1520853523661",
    "data": {
        "app": {"appId": "com.example.someApp", "sdkVersion": "2.4.6", "appVersion": "256"},
        "device": {"platform": "ios", "platformVersion": "11.2"},
        "security": [
            {"id": "com.example.DeveloperMode", "name": "Developer Mode", "passed": False},
            {"id": "com.example.DebuggerCheck", "name": "Debugger", "passed": True},
        ],
    },
}


@pytest.fixture
def init_payload():
    return copy.deepcopy(INIT_PAYLOAD)


@pytest.fixture
def security_payload():
    return copy.deepcopy(SECURITY_PAYLOAD)


class FakeRedis:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def ping(self):
        if self.fail:
            raise redis.ConnectionError("Error 111 connecting to redis:6379. Connection refused.")
        return True


class FakeQueue:
    """Records what the routes push to Redis."""

    def __init__(self):
        self.queued = []
        self.dlq = []
        self.counters = {}
        self.down = False

    def enqueue(self, endpoint, payload):
        if self.down:
            raise redis.ConnectionError("Connection refused")
        self.queued.append((endpoint, payload))

    def push_dlq(self, event, error):
        self.dlq.append((event, error))

    def incr(self, name, n=1):
        self.counters[name] = self.counters.get(name, 0) + n


@pytest.fixture
def queue(monkeypatch):
    q = FakeQueue()
    monkeypatch.setattr(metrics_routes, "enqueue", q.enqueue)
    monkeypatch.setattr(metrics_routes, "push_dlq", q.push_dlq)
    monkeypatch.setattr(metrics_routes, "incr", q.incr)
    monkeypatch.setattr(metrics_routes, "snapshot", lambda: {k: str(v) for k, v in q.counters.items()})
    monkeypatch.setattr(metrics_routes, "queue_len", lambda: len(q.queued))
    monkeypatch.setattr(metrics_routes, "dlq_len", lambda: len(q.dlq))
    return q


@pytest.fixture
def client(queue):
    app.dependency_overrides[get_pingable] = lambda: FakeRedis()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class MemoryRedis:
    """Just enough of redis.Redis(decode_responses=True) for the queue and counters."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.values = {}
        self.lists = {}

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("Error 111 connecting to redis:6379. Connection refused.")

    def incrby(self, key, n):
        self._check()
        self.values[key] = str(int(self.values.get(key, 0)) + n)
        return int(self.values[key])

    def set(self, key, value):
        self._check()
        self.values[key] = str(value)
        return True

    def get(self, key):
        self._check()
        return self.values.get(key)

    def scan_iter(self, pattern):
        self._check()
        return iter([k for k in self.values if fnmatch.fnmatchcase(k, pattern)])

    def rpush(self, key, *values):
        self._check()
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def llen(self, key):
        self._check()
        return len(self.lists.get(key, []))


@pytest.fixture
def memory_redis(monkeypatch):
    store = MemoryRedis()
    monkeypatch.setattr(metrics_store, "r", lambda: store)
    monkeypatch.setattr(redis_queue, "get_redis", lambda: store)
    return store
