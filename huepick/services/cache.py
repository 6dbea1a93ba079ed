"""
HuePick Pixel Buffer Cache
Bounded in-memory cache of decoded pixel buffers keyed by image URI.

Eviction is FIFO: when the cache is full the entry inserted earliest is
dropped, regardless of how recently it was read. The cache holds no lock;
two concurrent loads of the same uncached URI may both decode and insert,
which is wasteful but harmless because both produce identical buffers.
"""
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from loguru import logger

from huepick.config import config
from huepick.errors import ImageDecodeError
from huepick.services.imaging import PixelBuffer, get_buffer_dimensions, load_pixel_buffer

BufferLoader = Callable[[str], Awaitable[PixelBuffer]]


class CacheBackend(ABC):
    """Abstract base class for cache backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Set value in cache."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if key exists."""
        pass

    @abstractmethod
    def clear(self) -> bool:
        """Clear all cache entries."""
        pass


class InMemoryFIFOCache(CacheBackend):
    """In-memory cache evicting the oldest-inserted entry at capacity."""

    def __init__(self, max_size: int = 10):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._cache: "OrderedDict[str, Any]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        """Get value; reads never change insertion order."""
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> bool:
        """Insert value, evicting the oldest entry if at capacity."""
        if key in self._cache:
            # Overwrite keeps the original insertion slot
            self._cache[key] = value
            return True

        while len(self._cache) >= self.max_size:
            self._evict_oldest()

        self._cache[key] = value
        return True

    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def exists(self, key: str) -> bool:
        return key in self._cache

    def clear(self) -> bool:
        """Clear all entries."""
        self._cache.clear()
        return True

    def keys(self) -> List[str]:
        """Keys in insertion order, oldest first."""
        return list(self._cache.keys())

    def __len__(self) -> int:
        return len(self._cache)

    def _evict_oldest(self):
        """Evict first inserted entry."""
        if not self._cache:
            return
        oldest_key, _ = self._cache.popitem(last=False)
        logger.debug(f"Evicted cached buffer {oldest_key}")


class PixelBufferCache:
    """
    Owner of decoded pixel buffers.

    Buffers are decoded on first request and shared read-only with samplers
    and clusterers afterwards. Callers should call ``clear()`` at teardown.
    """

    def __init__(self, max_size: Optional[int] = None, loader: Optional[BufferLoader] = None):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of buffers kept (default from config)
            loader: Coroutine function turning a URI into a PixelBuffer;
                defaults to reading and decoding with Pillow
        """
        self.max_size = max_size if max_size is not None else config.MAX_CACHE_SIZE
        self._backend = InMemoryFIFOCache(self.max_size)
        self._loader = loader or load_pixel_buffer

    async def load(self, uri: str) -> Optional[PixelBuffer]:
        """
        Return the buffer for ``uri``, decoding and caching it on a miss.

        Returns:
            PixelBuffer, or None if the image can't be read or decoded
        """
        cached = self._backend.get(uri)
        if cached is not None:
            logger.debug(f"Using cached buffer for {uri}")
            return cached

        try:
            buffer = await self._loader(uri)
        except ImageDecodeError as e:
            logger.warning(f"Failed to load image {uri}: {e}")
            return None

        if buffer is None:
            return None

        self._backend.set(uri, buffer)
        logger.info(f"Loaded image {buffer.width}×{buffer.height} from {uri}")
        return buffer

    async def dimensions(self, uri: str) -> Optional[Tuple[int, int]]:
        """Get (width, height) of the image behind ``uri``."""
        buffer = await self.load(uri)
        if buffer is None:
            return None
        return get_buffer_dimensions(buffer)

    def get(self, uri: str) -> Optional[PixelBuffer]:
        """Return a cached buffer without loading."""
        return self._backend.get(uri)

    def put(self, uri: str, buffer: PixelBuffer) -> None:
        """Insert an already decoded buffer."""
        self._backend.set(uri, buffer)

    def keys(self) -> List[str]:
        return self._backend.keys()

    def clear(self) -> None:
        """Drop every cached buffer."""
        self._backend.clear()
        logger.info("Pixel buffer cache cleared")

    def __contains__(self, uri: str) -> bool:
        return self._backend.exists(uri)

    def __len__(self) -> int:
        return len(self._backend)
