import threading


class RowAggregator:
    """Collects rows appended from concurrent project workers."""

    def __init__(self):
        self._rows = []
        self._lock = threading.Lock()

    def add(self, row):
        # The lock only guards the append, never a network call
        with self._lock:
            self._rows.append(row)

    def rows(self):
        """Snapshot of the rows in completion order."""
        with self._lock:
            return list(self._rows)

    def sorted_rows(self):
        """Snapshot of the rows ordered by project key."""
        return sorted(self.rows(), key=lambda row: row.project)

    def __len__(self):
        with self._lock:
            return len(self._rows)
