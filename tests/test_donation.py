import pytest

from treat_focus.errors import ConfigurationError, NothingToDonateError
from treat_focus.models import Shelter

SHELTER = Shelter(name="Happy Paws", url="https://happypaws.example/donate")


@pytest.mark.parametrize("url", ["", "   ", "https://"])
def test_unset_url_is_a_configuration_error(donations, opened_urls, url) -> None:
    with pytest.raises(ConfigurationError):
        donations.donate_now(Shelter(name="X", url=url), 100)
    assert opened_urls == []


@pytest.mark.parametrize("outstanding", [0, -3])
def test_nothing_outstanding(donations, opened_urls, outstanding) -> None:
    with pytest.raises(NothingToDonateError):
        donations.donate_now(SHELTER, outstanding)
    assert opened_urls == []


def test_confirmed_donation_returns_outstanding(donations, opened_urls) -> None:
    assert donations.donate_now(SHELTER, 250) == 250
    assert opened_urls == [SHELTER.url]


def test_declined_donation_returns_zero(donations, opened_urls, confirm_answers) -> None:
    confirm_answers[:] = [False]

    assert donations.donate_now(SHELTER, 250) == 0
    assert opened_urls == [SHELTER.url]


def test_prompt_shows_dollars(logger) -> None:
    from treat_focus.donation import DonationRecorder

    prompts = []
    recorder = DonationRecorder(
        confirm=lambda p: prompts.append(p) or True,
        logger=logger,
        open_url=lambda url: None,
    )
    recorder.donate_now(SHELTER, 1234)

    assert prompts == ["Mark $12.34 as donated?"]
