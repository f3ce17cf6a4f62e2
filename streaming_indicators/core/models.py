"""
Market data models consumed by the indicators.

- Bar: OHLCV price data for one period, with the derived prices
  (typical, median, weighted close) several indicators use
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any


# ═══════════════════════════════════════════════════════════════════════
# MARKET DATA MODELS
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Bar:
    """
    OHLCV bar data representing price action for a time period.

    Attributes:
        open: Opening price
        high: High price
        low: Low price
        close: Closing price
        volume: Trading volume
        timestamp: Bar timestamp (optional, indicators never read it)
        symbol: Instrument symbol (optional)
    """
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    timestamp: Optional[datetime] = None
    symbol: str = ""

    @property
    def typical_price(self) -> float:
        """Return typical price (high + low + close) / 3"""
        return (self.high + self.low + self.close) / 3.0

    @property
    def median_price(self) -> float:
        """Return median price (high + low) / 2"""
        return (self.high + self.low) / 2.0

    @property
    def weighted_close(self) -> float:
        """Return weighted close (high + low + 2 * close) / 4"""
        return (self.high + self.low + 2.0 * self.close) / 4.0

    @property
    def mid_price(self) -> float:
        """Return mid price (average of open and close)"""
        return (self.open + self.close) / 2.0

    @property
    def range(self) -> float:
        """Return bar range (high - low)"""
        return self.high - self.low

    @property
    def body(self) -> float:
        """Return bar body (abs of open - close)"""
        return abs(self.open - self.close)

    @property
    def is_bullish(self) -> bool:
        """Check if bar is bullish (close > open)"""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if bar is bearish (close < open)"""
        return self.close < self.open

    def to_dict(self) -> Dict[str, Any]:
        return {
            'symbol': self.symbol,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'open': self.open,
            'high': self.high,
            'low': self.low,
            'close': self.close,
            'volume': self.volume,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Bar':
        """
        Build a Bar from a mapping with open/high/low/close keys.

        volume, timestamp (datetime or ISO string) and symbol are optional.
        """
        timestamp = data.get('timestamp')
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            open=float(data['open']),
            high=float(data['high']),
            low=float(data['low']),
            close=float(data['close']),
            volume=float(data.get('volume') or 0.0),
            timestamp=timestamp,
            symbol=data.get('symbol') or "",
        )
