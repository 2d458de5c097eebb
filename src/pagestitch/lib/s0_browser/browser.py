"""Session navigateur Chrome dédiée aux captures."""

from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from pagestitch.config import WAIT_TIMES

from .driver import SeleniumDriver
from .types import BrowserConfig, BrowserHandle


class BrowserManager:
    """
    Ouvre et ferme un Chrome configuré pour la capture.

    Utilisable comme context manager :

        with BrowserManager(BrowserConfig(headless=True)) as manager:
            manager.open_page("https://example.com")
            driver = manager.get_capture_driver()
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.handle: Optional[BrowserHandle] = None

    def build_options(self) -> Options:
        config = self.config
        options = Options()

        if config.headless:
            options.add_argument("--headless=new")
            options.add_argument("--disable-gpu")
        if config.window_size:
            options.add_argument("--window-size={},{}".format(*config.window_size))
        if config.maximize:
            options.add_argument("--start-maximized")
        if config.device_scale_factor:
            options.add_argument(f"--force-device-scale-factor={config.device_scale_factor}")
        if config.user_agent:
            options.add_argument(f"user-agent={config.user_agent}")

        # Scrollbars en overlay : elles ne réduisent pas le viewport capturé.
        for argument in ("--hide-scrollbars", "--no-sandbox", "--disable-dev-shm-usage"):
            options.add_argument(argument)
        return options

    def start(self) -> BrowserHandle:
        if self.handle is not None and self.handle.is_started:
            return self.handle

        print("[BROWSER] Installation du pilote Chrome...")
        try:
            driver = webdriver.Chrome(
                service=Service(ChromeDriverManager().install()),
                options=self.build_options(),
            )
        except WebDriverException as e:
            print(f"[ERREUR] Chrome n'a pas démarré: {e}")
            raise

        driver.set_page_load_timeout(self.config.page_load_timeout)
        if self.config.maximize and not self.config.headless:
            driver.maximize_window()

        print("[BROWSER] Chrome prêt pour la capture")
        self.handle = BrowserHandle(driver=driver, is_started=True)
        return self.handle

    def stop(self) -> None:
        if self.handle is None or not self.handle.is_started:
            return
        self.handle.close()
        print("[BROWSER] Chrome fermé")

    def open_page(self, url: str, timeout: float = WAIT_TIMES['page_load']) -> bool:
        if self.handle is None:
            raise RuntimeError("Le navigateur doit être démarré avant d'ouvrir une page.")
        return open_page(self.handle, url, timeout)

    def get_capture_driver(self) -> SeleniumDriver:
        """Retourne le driver actif sous forme de ``DriverApi``."""
        if self.handle is None or not self.handle.is_started:
            raise RuntimeError("Le navigateur doit être démarré avant la capture.")
        return SeleniumDriver(self.handle.driver)

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def open_page(handle: BrowserHandle, url: str, timeout: float = WAIT_TIMES['page_load']) -> bool:
    """
    Charge ``url`` et attend ``document.readyState == "complete"``.

    Une capture lancée avant la fin du chargement mesure une page incomplète
    (taille, images non décodées).
    """
    if not handle or not handle.is_started:
        print("[ERREUR] Navigateur non démarré")
        return False

    print(f"[BROWSER] Chargement de {url}")
    try:
        handle.driver.get(url)
        WebDriverWait(handle.driver, timeout).until(
            lambda d: d.execute_script("return document.readyState") == "complete"
        )
        return True
    except TimeoutException:
        print(f"[ERREUR] Page incomplète après {timeout}s: {url}")
    except WebDriverException as e:
        print(f"[ERREUR] Chargement de {url} impossible: {e}")
    return False
