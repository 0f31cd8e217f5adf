"""Run the student report service with the Flask development server."""

from typing import Optional

import click

from .factory import create_app


@click.command()
@click.option('--host', default='0.0.0.0', help='Interface to listen on.')
@click.option('--port', type=int, default=None,
              help='Port to listen on; defaults to the PORT setting.')
def serve(host: str, port: Optional[int]) -> None:
    """Serve student reports. For development only."""
    app = create_app()
    port = port or app.config['PORT']
    click.echo(f'Student report service starting on port {port}')
    click.echo(f'Student report endpoint: '
               f'http://localhost:{port}/api/v1/students/{{id}}/report')
    click.echo(f'Students API: {app.config["NODEJS_API_URL"]}')
    app.run(host=host, port=port, threaded=True)


if __name__ == '__main__':
    serve()
