import json

import click
from flask import Flask, Response, g

from ddnstool import settings
from ddnstool.config import configure_logging

def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)

    if test_config:
        app.config.update(test_config)
    else:
        app.config['SECRET_KEY'] = settings.FLASK_SECRET_KEY # pragma: no cover

    configure_logging()

    @app.route("/healthcheck")
    def healthcheck():
        return Response("<p>Hello World</p>"), 200

    from ddnstool import orchestrator
    app.register_blueprint(orchestrator.bp)

    @app.cli.command("update")
    @click.option("--domain", required=True, help="Comma-separated list of domains to update.")
    @click.option("--ipv4", default=None, help="IPv4 address for A records.")
    @click.option("--ipv6", default=None, help="IPv6 address for AAAA records.")
    @click.option("--proxy/--no-proxy", default=settings.DEFAULT_PROXIED, help="Proxy records through Cloudflare.")
    @click.option("--token", envvar="CF_API_TOKEN", default="", help="Cloudflare API token.")
    @click.option("--log", "diagnostics", is_flag=True, help="Emit diagnostic logs.")
    def update_command(domain, ipv4, ipv6, proxy, token, diagnostics):
        """Reconcile DNS records for the given domains once and print the result."""
        from ddnstool.errors import DDNSError
        from ddnstool.helpers import split_domains

        g.diagnostics = diagnostics or settings.LOG_ENABLED
        try:
            batch = orchestrator.update_flow(
                token,
                split_domains(domain),
                ipv4=ipv4,
                ipv6=ipv6,
                proxied=proxy,
            )
        except DDNSError as e:
            click.echo(json.dumps({'error': e.message}))
            raise SystemExit(1)

        click.echo(json.dumps(batch.to_dict()))
        if batch.failed:
            raise SystemExit(1)

    return app
