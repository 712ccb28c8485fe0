"""Per-user serialization of cart and checkout commands.

Commands that read and rewrite a user's cart are run one at a time per user,
with the lock held until the command's Unit of Work has committed. This makes
concurrent add/remove/place-order requests for the same user linearizable
within a process; requests for different users still run in parallel.
"""

import threading
import weakref
from contextlib import contextmanager

from protean.utils.globals import current_domain

_registry_lock = threading.Lock()
# Entries vanish once no caller holds the lock
_user_locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()


def lock_for(user_id: str) -> threading.Lock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.Lock()
        return lock


@contextmanager
def serialized_for(user_id: str):
    lock = lock_for(str(user_id))
    with lock:
        yield


def process_for_user(user_id: str, command):
    """Process ``command`` synchronously while holding ``user_id``'s lock."""
    with serialized_for(user_id):
        return current_domain.process(command, asynchronous=False)
