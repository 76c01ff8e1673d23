# main.py
import sys
import logging
from PySide6.QtWidgets import QApplication
from models import ModelState
from dataio import get_config, list_available_variants, load_variant, VariantConfig, VariantConfigError
from view.main_window import MainWindow
from viewmodel.visualizer_vm import VisualizerViewModel
from viewmodel.logging_helpers import log_message, log_exception


def _initial_variant(cfg) -> VariantConfig:
    """Variant used at startup: the one from the last session, else built-in defaults."""
    try:
        return load_variant(cfg.last_variant)
    except VariantConfigError as e:
        logging.getLogger(__name__).warning(f"Falling back to default variant: {e}")
        return VariantConfig()


def main():
    cfg = get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
    )

    app = QApplication(sys.argv)

    # Model + ViewModel + View
    model_state = ModelState(_initial_variant(cfg))
    viewmodel = VisualizerViewModel(model_state)
    window = MainWindow(viewmodel)

    window.controls_dock.set_variants(list_available_variants(), current=model_state.config.name)

    def remember_variant(variant):
        try:
            cfg.last_variant = variant.name
            cfg.save()
        except OSError as e:
            log_exception("Could not save settings", e, vm=viewmodel)

    viewmodel.variant_changed.connect(remember_variant)

    log_message(f"Started with variant '{model_state.config.name}'.", vm=viewmodel)
    viewmodel.update_plot()

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
