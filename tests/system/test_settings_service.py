import pytest

from career_passport.core.exceptions import ValidationError
from career_passport.system.cached_settings_repository import CachedSettingsRepository
from career_passport.system.service import SettingsService

SCRIPT_URL = "https://script.google.com/macros/s/AKfy/exec"


@pytest.fixture
def svc(worker_storage):
    return SettingsService(CachedSettingsRepository(worker_storage), default_worker_emails=["Boss@Example.org"])


def test_authorized_emails_merge_settings_and_defaults(svc):
    svc.add_authorized_email("New@Example.org")
    svc.add_authorized_email("new@example.org")

    assert svc.authorized_worker_emails() == ["worker@example.org", "new@example.org", "boss@example.org"]
    assert svc.is_authorized_worker("BOSS@example.org")
    assert not svc.is_authorized_worker("amy@example.org")


def test_remove_authorized_email(svc, fake_conn):
    svc.add_authorized_email("x@example.org")
    svc.remove_authorized_email("X@example.org")

    assert "x@example.org" not in svc.authorized_worker_emails()
    assert fake_conn.saves("settings")[-1]["authorizedWorkerEmails"] == ["worker@example.org"]


def test_categories_are_unique(svc, fake_conn):
    svc.add_category("Cooking")
    categories = svc.add_category("Cooking")

    assert categories.count("Cooking") == 1
    assert fake_conn.saves("categories")[-1]["items"] == categories

    assert "Cooking" not in svc.delete_category("Cooking")
    with pytest.raises(ValidationError):
        svc.delete_category("Cooking")


@pytest.mark.parametrize(
    "url",
    [
        "",
        "http://script.google.com/macros/s/AKfy/exec",
        "https://script.google.com/macros/s/AKfy/dev",
        "https://example.org/exec",
    ],
)
def test_cloud_config_rejects_non_script_urls(svc, url):
    with pytest.raises(ValidationError):
        svc.update_cloud_config(script_url=url)


def test_share_link_encodes_script_url(svc):
    config = svc.update_cloud_config(script_url=f"  {SCRIPT_URL} ", deployed_url="https://passport.example.org/")

    assert config.enabled is True
    assert svc.share_link() == (
        "https://passport.example.org/#/?classId=https%3A%2F%2Fscript.google.com%2Fmacros%2Fs%2FAKfy%2Fexec"
    )


def test_share_link_needs_both_urls(svc):
    svc.update_cloud_config(script_url=SCRIPT_URL)

    with pytest.raises(ValidationError):
        svc.share_link()


def test_share_link_qr_is_png(svc):
    svc.update_cloud_config(script_url=SCRIPT_URL, deployed_url="https://passport.example.org")

    assert svc.share_link_qr_png().startswith(b"\x89PNG")


def test_update_appearance(svc):
    settings = svc.update_appearance(landing_title=" Hello ", landing_subtitle="Sub", landing_image_url="")

    assert settings.landing_title == "Hello"
    assert settings.landing_image_url.startswith("https://")
    with pytest.raises(ValidationError):
        svc.update_appearance(landing_title=" ", landing_subtitle="", landing_image_url="")
