import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque

MAX_LOGS = 200

@dataclass
class StatusStore:
    echo: bool = False   # mirror log lines to stdout
    requests_served: int = 0
    last_error: str | None = None
    logs: Deque[str] = field(default_factory=lambda: deque(maxlen=MAX_LOGS))

    def log(self, msg: str):
        line = f"{time.strftime('%H:%M:%S')} {msg}"
        self.logs.append(line)
        if self.echo:
            print(line, flush=True)

    def recent(self, n: int = 50) -> list[str]:
        return list(self.logs)[-n:]
