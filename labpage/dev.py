from __future__ import annotations

import argparse
import functools
import http.server
from pathlib import Path

from labpage.build import build
from labpage.config import PREFIX, read_settings

PORT = 8787


def serve(site_dir: Path, port: int = PORT) -> None:
    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))
    httpd = http.server.ThreadingHTTPServer(("localhost", port), handler)
    url = f"http://localhost:{port}/"
    print(f"{PREFIX} Serving {url} (site dir: {site_dir})")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print(f"{PREFIX} Shutting down server.")
    finally:
        httpd.server_close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render and serve the lab homepage locally.")
    parser.add_argument("--once", action="store_true", help="Render once and exit without serving.")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port to serve on (default: {PORT}).")
    parser.add_argument("--config", type=Path, help="Path to site.json.")
    args = parser.parse_args(argv)

    settings = read_settings(args.config)
    status = build(settings)
    url = f"http://localhost:{args.port}/"
    if status == 0:
        print(f"{PREFIX} Build complete. Preview at {url}")
    else:
        print(f"{PREFIX} Build failed; serving the error page at {url}")
    if args.once:
        return status
    if not settings.site_dir.exists():
        print(f"{PREFIX} {settings.site_dir} missing after build.")
        return 1
    serve(settings.site_dir, args.port)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
