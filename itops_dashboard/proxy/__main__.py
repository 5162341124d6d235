"""Run the sheet proxy on all interfaces:  python -m itops_dashboard.proxy"""

from . import create_app

app = create_app()

if __name__ == "__main__":
    host = app.config["HOST"]
    port = app.config["PORT"]
    app.logger.info("Sheet proxy listening on http://%s:%d (API at /api/sheets/all)", host, port)
    app.run(host=host, port=port)
