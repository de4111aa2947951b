"""
Page Fetcher

Renders the vendor support page in Chrome. The download tables are filled
in by client-side scripts, so a plain HTTP GET does not see them.
"""

import logging

import requests
from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from monitoring.errors import FetchError

logger = logging.getLogger(__name__)


def get_driver(headless=True):
    """
    Get a configured Chrome driver.
    """
    chrome_options = Options()
    if headless:
        chrome_options.add_argument("--headless")
        chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_experimental_option("excludeSwitches", ["enable-logging"])

    return webdriver.Chrome(
        service=Service(ChromeDriverManager().install()), options=chrome_options
    )


class ChromePageFetcher:
    """Opens one browser session per fetch and returns the rendered HTML."""

    def __init__(self, headless=True, page_load_timeout=10, driver_factory=get_driver):
        self.headless = headless
        self.page_load_timeout = page_load_timeout
        self._driver_factory = driver_factory

    def fetch(self, url, ready_selector=None):
        """
        Render ``url`` and return its page source.

        Args:
            url (str): Listing page
            ready_selector (str, optional): CSS selector of the element the
                page scripts fill in. If it does not appear in time the page
                is captured anyway and the extractor reports what is missing.

        Raises:
            FetchError: If the browser cannot be started or the page cannot be loaded
        """
        try:
            driver = self._driver_factory(headless=self.headless)
        except (WebDriverException, requests.RequestException, ValueError) as e:
            # webdriver-manager raises requests errors when offline and
            # ValueError when no Chrome install is found.
            raise FetchError(f"Could not start the browser: {e}") from e

        try:
            logger.info(f"Opening {url}")
            driver.get(url)

            if ready_selector:
                try:
                    WebDriverWait(driver, self.page_load_timeout).until(
                        EC.presence_of_element_located((By.CSS_SELECTOR, ready_selector))
                    )
                except TimeoutException:
                    logger.warning(
                        f"'{ready_selector}' did not appear within {self.page_load_timeout}s, "
                        "capturing the page anyway"
                    )

            return driver.page_source

        except WebDriverException as e:
            raise FetchError(f"Could not load {url}: {e}") from e
        finally:
            try:
                driver.quit()
            except WebDriverException as e:
                logger.debug(f"Error closing browser: {e}")
