from PySide6.QtCore import QElapsedTimer

class HighResTimer:
    def __init__(self):
        self.t = QElapsedTimer()
        self._frozen = None

    def start(self):
        self._frozen = None
        self.t.start()

    def stop(self) -> float:
        if self._frozen is None:
            self._frozen = self._live()
        return self._frozen

    @property
    def running(self) -> bool:
        return self.t.isValid() and self._frozen is None

    def elapsed_sec(self) -> float:
        if self._frozen is not None:
            return self._frozen
        return self._live()

    def _live(self) -> float:
        if not self.t.isValid():
            return 0.0
        return max(0.0, self.t.nsecsElapsed() / 1e9)
