"""
Session event log

Each session appends events to <log_dir>/session-{timestamp}.ndjson, one
JSON object per line. Nothing is written to the console, so the machine's
text protocol on stdout stays clean.
"""

from __future__ import annotations

import fcntl
import json
from datetime import datetime
from pathlib import Path


class SessionLog:
    """
    NDJSON log of one vending session

    Unless start=False, the log directory is created on construction and a
    session_start event is recorded immediately.
    """

    # Event types
    SESSION_START = "session_start"
    SESSION_END = "session_end"
    COIN_INSERTED = "coin_inserted"
    COIN_REJECTED = "coin_rejected"
    ITEM_DISPENSED = "item_dispensed"
    PURCHASE_REJECTED = "purchase_rejected"
    CHANGE_RETURNED = "change_returned"

    def __init__(
        self,
        log_dir: Path | None = None,
        session_id: str | None = None,
        start: bool = True,
    ) -> None:
        """
        Args:
            log_dir: Log directory (default: .vendsim/logs/)
            session_id: Session ID (default: generated from the current time)
            start: Record session_start; False attaches to an existing log read-only
        """
        self.log_dir = Path(log_dir) if log_dir else Path(".vendsim/logs")

        if session_id:
            self.session_id = session_id
        else:
            timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
            self.session_id = f"session-{timestamp}"

        self.log_file = self.log_dir / f"{self.session_id}.ndjson"

        if start:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_event(self.SESSION_START, {"session_id": self.session_id})

    @classmethod
    def open(cls, log_file: Path) -> SessionLog:
        """Attach to an existing log file for reading, without writing to it."""
        log_file = Path(log_file)
        return cls(log_dir=log_file.parent, session_id=log_file.stem, start=False)

    def log_event(self, event_type: str, data: dict | None = None) -> None:
        """
        Append one event under an exclusive lock

        Args:
            event_type: One of the event type constants
            data: Event payload

        Line format:
        {"timestamp": "2026-...", "session_id": "...", "type": "coin_inserted", "data": {...}}
        """
        event = {
            "timestamp": datetime.now().isoformat(),
            "session_id": self.session_id,
            "type": event_type,
            "data": data or {},
        }

        with open(self.log_file, "a") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(json.dumps(event, ensure_ascii=False) + "\n")
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def log_coin_inserted(self, value: int, balance: int) -> None:
        self.log_event(self.COIN_INSERTED, {"value": value, "balance": balance})

    def log_coin_rejected(self, token: str, reason: str) -> None:
        self.log_event(self.COIN_REJECTED, {"token": token, "reason": reason})

    def log_item_dispensed(self, code: str, price: int, balance: int) -> None:
        self.log_event(
            self.ITEM_DISPENSED,
            {"code": code, "price": price, "balance": balance},
        )

    def log_purchase_rejected(self, code: str, reason: str) -> None:
        self.log_event(self.PURCHASE_REJECTED, {"code": code, "reason": reason})

    def log_change_returned(self, amount: int, coins: dict[int, int]) -> None:
        # JSON object keys must be strings
        self.log_event(
            self.CHANGE_RETURNED,
            {
                "amount": amount,
                "coins": {str(coin): count for coin, count in coins.items() if count},
            },
        )

    def log_session_end(self, balance: int) -> None:
        self.log_event(self.SESSION_END, {"balance": balance})

    def get_log_path(self) -> Path:
        """Return the current log file path."""
        return self.log_file

    def read_events(self, event_type: str | None = None) -> list[dict]:
        """
        Read events back from the log file

        Args:
            event_type: Filter; None returns every event
        """
        if not self.log_file.exists():
            return []

        events = []
        with open(self.log_file) as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    event = json.loads(line)
                    if event_type is None or event.get("type") == event_type:
                        events.append(event)
                except json.JSONDecodeError:
                    continue

        return events

    def get_session_summary(self) -> dict:
        """
        Summarize the session

        Returns:
            {
                "session_id": "...",
                "total_events": 12,
                "coins_inserted": 4,
                "total_inserted": 300,
                "items_dispensed": 2,
                "total_sales": 270,
                "total_refunded": 30,
                "rejected_purchases": 1,
            }
        """
        events = self.read_events()

        coins_inserted = 0
        total_inserted = 0
        items_dispensed = 0
        total_sales = 0
        total_refunded = 0
        rejected_purchases = 0

        for event in events:
            event_type = event.get("type")
            data = event.get("data", {})

            if event_type == self.COIN_INSERTED:
                coins_inserted += 1
                total_inserted += data.get("value", 0)
            elif event_type == self.ITEM_DISPENSED:
                items_dispensed += 1
                total_sales += data.get("price", 0)
            elif event_type == self.CHANGE_RETURNED:
                total_refunded += data.get("amount", 0)
            elif event_type == self.PURCHASE_REJECTED:
                rejected_purchases += 1

        return {
            "session_id": self.session_id,
            "total_events": len(events),
            "coins_inserted": coins_inserted,
            "total_inserted": total_inserted,
            "items_dispensed": items_dispensed,
            "total_sales": total_sales,
            "total_refunded": total_refunded,
            "rejected_purchases": rejected_purchases,
        }
