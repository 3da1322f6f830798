from tbgen.policies.rebrand import rebrand


def test_rebrand_names_and_urls():
    text = "Firefox and firefox (FF91) on AMO: https://addons.mozilla.org/firefox/"
    assert rebrand(text) == (
        "Thunderbird and thunderbird (TB91) on ATN: https://addons.thunderbird.net/thunderbird/"
    )


def test_rebrand_keeps_firefox_only_support_urls():
    url = "https://support.mozilla.org/kb/setting-certificate-authorities-firefox"
    assert rebrand(url) == url


def test_rebrand_joins_lines():
    assert rebrand(["Firefox", "FirefoxESR"]) == "Thunderbird\nFirefoxESR"
