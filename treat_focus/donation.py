import logging
import webbrowser
from typing import Callable

from .errors import ConfigurationError, NothingToDonateError
from .models import Shelter
from .utils import cents_to_dollars


class DonationRecorder:
    def __init__(
        self,
        confirm: Callable[[str], bool],
        logger: logging.Logger,
        open_url: Callable[[str], object] = webbrowser.open,
    ):
        self._confirm = confirm
        self._logger = logger
        self._open_url = open_url

    def donate_now(self, shelter: Shelter, outstanding_cents: int) -> int:
        if not shelter.has_url:
            raise ConfigurationError("Add shelter URL in Settings.")
        if outstanding_cents <= 0:
            raise NothingToDonateError("No outstanding pledge.")

        self._logger.info(f"Donation hand-off shelter={shelter.name} url={shelter.url}")
        self._open_url(shelter.url)

        if not self._confirm(f"Mark {cents_to_dollars(outstanding_cents)} as donated?"):
            self._logger.info("Donation not confirmed")
            return 0
        return int(outstanding_cents)
