import pytest
from ua_scout.software import (
    CONTACT_FORM_7,
    WORDPRESS,
    ConditionallyReady,
    FormSignal,
    Unready,
    advisory_kind,
    detect_contact_form_7,
    detect_software,
    detect_wordpress,
)

EMAIL_FORM = ("/send", [("email", "email")])


def test_wordpress_detected_from_same_host_assets(make_page):
    page = make_page(
        url="https://example.com/contact",
        images=["https://example.com/wp-content/uploads/2020/logo.png"],
        forms=[EMAIL_FORM],
    )
    assert detect_wordpress(page)
    assert detect_software(page) == [WORDPRESS]


@pytest.mark.parametrize(
    "image",
    [
        "https://cdn.example.net/wp-content/logo.png",
        "https://example.com/assets/wp-content/logo.png",
        "https://example.com/images/logo.png",
    ],
)
def test_wordpress_not_detected(make_page, image):
    page = make_page(url="https://example.com/", images=[image])
    assert not detect_wordpress(page)


def test_contact_form_7_detected_from_action(make_page):
    page = make_page(forms=[("/contact/#wpcf7-f42-p7-o1", [("your-email", "text")])])
    assert detect_contact_form_7(page)
    assert detect_software(page) == [CONTACT_FORM_7]


def test_both_detected_in_detector_order(make_page):
    page = make_page(
        url="https://example.com/",
        images=["https://example.com/wp-includes/x.gif"],
        forms=[("#wpcf7-f1", [("your-email", "email")])],
    )
    assert detect_software(page) == [WORDPRESS, CONTACT_FORM_7]


def test_detection_is_idempotent(make_page):
    page = make_page(images=["http://example.com/wp-content/a.png"])
    assert detect_software(page) == detect_software(page)


def test_known_software_is_unready():
    assert isinstance(WORDPRESS, Unready)
    assert WORDPRESS.homepage == "https://wordpress.org"
    assert CONTACT_FORM_7.name == "Contact Form 7"


def test_report_for_undetected_software(make_page):
    signal = FormSignal(make_page(forms=[EMAIL_FORM]))
    assert signal.software == []
    assert "could not be detected" in signal.report
    assert "appears to ask for an email address" in signal.report
    assert "dømi@dømi.fo" in signal.report


def test_report_names_unready_software(make_page):
    page = make_page(
        url="https://example.com/",
        images=["https://example.com/wp-content/a.png"],
        forms=[("#wpcf7-f1", [("email", "email")])],
    )
    report = FormSignal(page).report
    assert '<a href="https://wordpress.org">Wordpress</a>' in report
    assert '<a href="https://contactform7.com">Contact Form 7</a>' in report
    assert report.count("was not UA-ready at the time of writing") == 2
    assert "could not be detected" not in report


def test_report_for_conditionally_ready_software(make_page, monkeypatch):
    import ua_scout.software as software

    mailer = ConditionallyReady("MailThing", "https://mail.example", "SMTPUTF8 is enabled")
    monkeypatch.setattr(
        software, "detect_software", lambda page, detectors=None: [mailer]
    )

    report = FormSignal(make_page(forms=[EMAIL_FORM])).report

    assert "This form uses MailThing, which is UA-ready if SMTPUTF8 is enabled." in report
    assert "cannot test that (yet)" in report


def test_report_empty_when_all_known_ready(make_page, monkeypatch):
    import ua_scout.software as software

    monkeypatch.setattr(software, "is_known_ready", lambda s: True)
    signal = FormSignal(make_page(images=["http://example.com/wp-content/a.png"]))
    assert signal.report == ""


def test_report_is_cached(make_page, monkeypatch):
    import ua_scout.software as software

    calls = []

    def counting(page, detectors=software.DETECTORS):
        calls.append(page.url)
        return []

    monkeypatch.setattr(software, "detect_software", counting)
    signal = FormSignal(make_page(forms=[EMAIL_FORM]))
    first = signal.report
    assert signal.report is first
    assert signal.software is signal.software
    assert calls == ["http://example.com/"]


def test_identical_software_gives_identical_reports(make_page):
    a = FormSignal(make_page(url="http://example.com/a", forms=[("#wpcf7-f1", [("e", "email")])]))
    b = FormSignal(make_page(url="http://example.com/b", forms=[("#wpcf7-f9", [("e", "email")])]))
    assert a.report == b.report


def test_advisory_kind_follows_variant():
    assert advisory_kind(WORDPRESS) == "unready"
    assert advisory_kind(ConditionallyReady("MailThing", "https://mail.example", "x")) == "conditional"
    with pytest.raises(TypeError):
        advisory_kind("Wordpress")
