from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    @abstractmethod
    def open(self, facing_mode: str, width: int, height: int) -> None:
        """Acquire the device. Size is a hint; the device negotiates. Raises on failure."""
        ...

    @abstractmethod
    def read_frame(self):
        """Current BGR frame (numpy array) or None if no frame is available."""
        ...

    @abstractmethod
    def release(self) -> None:
        """Stop every track. Safe to call when nothing is open."""
        ...

    @property
    @abstractmethod
    def active_tracks(self) -> int:
        ...
