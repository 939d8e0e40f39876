"""Demo: step a light through one day and print the rotation at each tick."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sunlight_driver.config import config_from_env, configure_logging  # noqa: E402
from sunlight_driver.contracts import SeasonMarker  # noqa: E402
from sunlight_driver.control.time_controller import TimeController  # noqa: E402
from sunlight_driver.control.time_sources import ManualTimeSource  # noqa: E402
from sunlight_driver.scene.orientation import LightTransform  # noqa: E402
from sunlight_driver.time.clamp import normalize  # noqa: E402


def main() -> int:
    """Run one equinox time-lapse with the configured observer."""
    cfg = config_from_env()
    configure_logging(cfg.log_level)

    light = LightTransform()
    controller = TimeController.from_config(
        cfg,
        time_source=ManualTimeSource(normalize(2017, 3, 21, 12, 0)),
        sink=light,
    )
    controller.apply_marker(SeasonMarker.MARCH)

    print("=== Sunlight Driver Time-Lapse Demo ===")
    print(f"lat={controller.coord.latitude:.6f} lon={controller.coord.longitude:.6f}")
    controller.toggle_iteration()
    while True:
        current = controller.current
        rotation = light.rotation
        print(
            f"{current.hour:02d}:{current.minute:02d} "
            f"pitch={rotation.pitch:7.3f} yaw={rotation.yaw:7.3f}"
        )
        if not controller.tick():
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
