"""Browser profiles: user agents and the driver family each browser launches with."""

from dataclasses import dataclass

from scrapeforge.models import Browser

# One fixed user agent per profile so that generated scripts are deterministic
USER_AGENTS: dict[str, str] = {
    'chrome': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'firefox': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0',
    'edge': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0',
    'brave': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'opera': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 OPR/106.0.0.0',
}


@dataclass(frozen=True)
class SeleniumFamily:
    """How a Selenium script launches a browser profile.

    Attributes:
        options_class: webdriver options class name (e.g. 'ChromeOptions')
        driver_class: webdriver class name (e.g. 'Chrome')
        service_import: Import line for the driver service
        manager_import: Import line for the webdriver-manager installer
        service_call: Expression building the service

    """

    options_class: str
    driver_class: str
    service_import: str
    manager_import: str
    service_call: str


@dataclass(frozen=True)
class PlaywrightFamily:
    """How a Playwright script launches a browser profile.

    Attributes:
        launcher: Playwright browser type ('chromium' or 'firefox')
        channel: Branded browser channel, if any

    """

    launcher: str
    channel: str | None = None


_CHROME_FAMILY = SeleniumFamily(
    options_class='ChromeOptions',
    driver_class='Chrome',
    service_import='from selenium.webdriver.chrome.service import Service as ChromeService',
    manager_import='from webdriver_manager.chrome import ChromeDriverManager',
    service_call='ChromeService(ChromeDriverManager().install())',
)

SELENIUM_FAMILIES: dict[str, SeleniumFamily] = {
    'chrome': _CHROME_FAMILY,
    'brave': _CHROME_FAMILY,
    'opera': _CHROME_FAMILY,
    'edge': SeleniumFamily(
        options_class='EdgeOptions',
        driver_class='Edge',
        service_import='from selenium.webdriver.edge.service import Service as EdgeService',
        manager_import='from webdriver_manager.microsoft import EdgeChromiumDriverManager',
        service_call='EdgeService(EdgeChromiumDriverManager().install())',
    ),
    'firefox': SeleniumFamily(
        options_class='FirefoxOptions',
        driver_class='Firefox',
        service_import='from selenium.webdriver.firefox.service import Service as FirefoxService',
        manager_import='from webdriver_manager.firefox import GeckoDriverManager',
        service_call='FirefoxService(GeckoDriverManager().install())',
    ),
}

PLAYWRIGHT_FAMILIES: dict[str, PlaywrightFamily] = {
    'chrome': PlaywrightFamily(launcher='chromium', channel='chrome'),
    'edge': PlaywrightFamily(launcher='chromium', channel='msedge'),
    'brave': PlaywrightFamily(launcher='chromium'),
    'opera': PlaywrightFamily(launcher='chromium'),
    'firefox': PlaywrightFamily(launcher='firefox'),
}

# Chromium-based browsers that webdriver-manager and Playwright cannot locate on their own
CUSTOM_BINARY_BROWSERS = ('brave', 'opera')


def user_agent_for(browser: Browser) -> str:
    """User agent string sent by static scripts for a browser profile."""
    return USER_AGENTS.get(browser, USER_AGENTS['chrome'])


def display_name(browser: Browser) -> str:
    """Capitalized browser name for messages in generated scripts."""
    return browser.capitalize()
