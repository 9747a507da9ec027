import argparse
import logging

from graph_digitizer.ui_window import GraphDigitizerWindow

log = logging.getLogger("graphdigitizer")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Digitize data points from an image of a graph.")
    p.add_argument("image", nargs="?", help="image to open on start-up")
    p.add_argument("-v", "--verbose", action="store_true", help="log debug diagnostics")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        app = GraphDigitizerWindow()
    except Exception:
        log.exception("Failed to start Graph Digitizer")
        raise
    if args.image:
        app.after(0, lambda: app.open_image(args.image))
    app.mainloop()


if __name__ == "__main__":
    main()
