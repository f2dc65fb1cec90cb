from typing import Optional

from thermite.common.logging import get_logger

L = get_logger(__name__)

DEFAULT_HYSTERESIS = 1.0


class Heater:
    """Decides whether the heater should run, with a hysteresis band around the target."""

    def __init__(self, hysteresis=DEFAULT_HYSTERESIS, is_on=False):
        """Initializes the heater.
        Args:
            hysteresis (float, optional): Half width of the band, in degrees Celsius. Defaults to 1.0.
            is_on (bool, optional): The initial state. Defaults to False.
        """
        self._hysteresis = hysteresis
        self._is_on = is_on

    @property
    def is_on(self) -> bool:
        return self._is_on

    def update(self, temp: float, target: Optional[float]) -> bool:
        """Updates the heater state from a temperature reading.

        The heater turns on at or below target - hysteresis and off at or above
        target + hysteresis. Inside the band, and while there is no target yet,
        it keeps its last state.

        Returns:
            True if the heater should be on.
        """
        if target is None:
            return self._is_on

        if temp <= target - self._hysteresis:
            is_on = True
        elif temp >= target + self._hysteresis:
            is_on = False
        else:
            is_on = self._is_on

        if is_on != self._is_on:
            L.info(f"Heater turned {'on' if is_on else 'off'} at {temp} C (target {target} C)")
            self._is_on = is_on
        return self._is_on
