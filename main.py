import logging
import tkinter as tk

from core.config.config_service import config_service
from core.logging.logging_setup import setup_logging_from_config
from worldclock import create_feature_view, get_feature_name
from worldclock.exceptions.errors import SettingsError
from worldclock.gui.settings_widget import WorldClockSettingsWidget
from worldclock.logic.worldclock_settings_repository import WorldClockSettingsRepository
from worldclock.models.worldclock_settings import WorldClockSettings

logger = logging.getLogger("worldclock.main")


class MainWindow(tk.Tk):
    def __init__(self, settings: WorldClockSettings):
        super().__init__()

        self.title(config_service.general.app_name or get_feature_name())
        self.geometry("1000x700")

        self.settings = settings
        self.settings_window = None
        self.view = None
        self._build_menu()
        self._mount_view()

        self.protocol("WM_DELETE_WINDOW", self.on_close)

    def _build_menu(self):
        menubar = tk.Menu(self)
        app_menu = tk.Menu(menubar, tearoff=0)
        app_menu.add_command(label="Settings…", command=self.open_settings)
        app_menu.add_separator()
        app_menu.add_command(label="Exit", command=self.on_close)
        menubar.add_cascade(label="World Clock", menu=app_menu)
        self.config(menu=menubar)

    def _mount_view(self):
        if self.view is not None:
            self.view.destroy()
        self.view = create_feature_view(self, self.settings)
        self.view.pack(fill="both", expand=True)

    def open_settings(self):
        if self.settings_window is not None and self.settings_window.winfo_exists():
            self.settings_window.lift()
            return
        self.settings_window = tk.Toplevel(self)
        self.settings_window.title("World Clock Settings")
        WorldClockSettingsWidget(
            self.settings_window,
            repository=WorldClockSettingsRepository(config_service),
            settings=self.settings,
            on_saved=self.on_settings_saved,
        ).pack(fill="both", expand=True)

    def on_settings_saved(self, settings: WorldClockSettings):
        """Rebuilds the clocks with the saved settings."""
        logger.info("Settings changed, rebuilding clock view")
        self.settings = settings
        self._mount_view()
        if self.settings_window is not None:
            self.settings_window.destroy()
            self.settings_window = None

    def on_close(self):
        """Stops the clocks before the window goes away."""
        self.view.destroy()
        self.destroy()


def load_settings() -> WorldClockSettings:
    try:
        return WorldClockSettingsRepository(config_service).load()
    except SettingsError as exc:
        logger.error("Invalid configuration, using defaults: %s", exc)
        return WorldClockSettings()


def main():
    setup_logging_from_config(config_service)
    app = MainWindow(load_settings())
    app.mainloop()


if __name__ == "__main__":
    main()
