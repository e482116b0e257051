from stationflow.config import load_settings
from stationflow.util.log import setup_logging
from stationflow.viz.app.single import serve_station_map


def main():
  settings = load_settings()
  setup_logging(settings.log_level)

  serve_station_map(settings)


if __name__ == "__main__":
  main()
