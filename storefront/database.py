import asyncio
import json
import logging
import os
import stat
import tempfile
from contextlib import asynccontextmanager, suppress
from pathlib import Path
from typing import Dict, Any, List, AsyncIterator, Union

from fastapi.concurrency import run_in_threadpool

from .models import CartItem

logger = logging.getLogger(__name__)

# This file holds the flat-file collections, the in-memory carts and
# the locks that serialize writers.

PRODUCTS = "products"
USERS = "users"
ORDERS = "orders"

Record = Dict[str, Any]

# read once; os.umask can only be queried by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)


class JsonStore:
    """One JSON array per collection, read and written whole."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self._locks: Dict[str, asyncio.Lock] = {}

    def path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _get_lock(self, name: str) -> asyncio.Lock:
        if name not in self._locks:
            self._locks[name] = asyncio.Lock()
        return self._locks[name]

    @asynccontextmanager
    async def locked(self, *names: str) -> AsyncIterator[None]:
        # sorted so that two multi-collection sections never deadlock
        locks = [self._get_lock(n) for n in sorted(set(names))]
        for l in locks:
            await l.acquire()
        try:
            yield
        finally:
            for l in reversed(locks):
                l.release()

    def load(self, name: str) -> List[Record]:
        path = self.path(name)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("Collection %s has no file at %s", name, path)
            return []
        except (OSError, ValueError) as e:
            logger.warning("Could not read collection %s from %s: %s", name, path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s in %s is not a JSON array", name, path)
            return []
        return data

    def save(self, name: str, records: List[Record]) -> bool:
        path = self.path(name)
        tmp = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(self.data_dir), suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, allow_nan=False)
            os.chmod(tmp, self._file_mode(path))
            os.replace(tmp, path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to write collection %s to %s", name, path)
            if tmp is not None:
                with suppress(OSError):
                    os.remove(tmp)
            return False
        logger.debug("Wrote %d records to %s", len(records), path)
        return True

    @staticmethod
    def _file_mode(path: Path) -> int:
        # mkstemp creates 0600; keep whatever mode the collection already had
        try:
            return stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            return 0o666 & ~_UMASK

    async def load_async(self, name: str) -> List[Record]:
        return await run_in_threadpool(self.load, name)

    async def save_async(self, name: str, records: List[Record]) -> bool:
        return await run_in_threadpool(self.save, name, records)


class CartStore:
    """Per-user carts kept in process memory; lost on restart."""

    def __init__(self):
        self._carts: Dict[str, List[Record]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _get_lock(self, user_id: str) -> asyncio.Lock:
        if user_id not in self._locks:
            self._locks[user_id] = asyncio.Lock()
        return self._locks[user_id]

    def get(self, user_id: str) -> List[Record]:
        return [dict(item) for item in self._carts.get(user_id, [])]

    async def add(self, user_id: str, product_id: int, quantity: int = 1) -> List[Record]:
        async with self._get_lock(user_id):
            cart = self._carts.setdefault(user_id, [])
            existing = next((item for item in cart if item["productId"] == product_id), None)
            if existing:
                existing["quantity"] += quantity
            else:
                cart.append(CartItem(productId=product_id, quantity=quantity).model_dump())
            return self.get(user_id)
