# main_server.py (REST gateway in front of the SOAP country service)
import logging

from flask import Flask, request, jsonify
from flasgger import Swagger

from .client import CountryClient
from .config import load_settings
from .errors import CountryServiceError
from .marshalling import create_marshaller

logger = logging.getLogger(__name__)


def create_app(country_client=None, settings=None):
    """Build the Flask app around an explicitly passed ``CountryClient``."""
    if country_client is None:
        settings = settings or load_settings()
        country_client = CountryClient.from_settings(settings, create_marshaller())

    app = Flask(__name__)
    Swagger(app, template={
        "swagger": "2.0",
        "info": {"title": "Country Population Gateway", "version": "1.0.0"},
        "basePath": "/",
        "schemes": ["http"],
    })

    @app.errorhandler(CountryServiceError)
    def handle_country_service_error(e):
        logger.error("Country lookup failed (%s): %s", e.kind, e)
        return jsonify(error=str(e), kind=e.kind), e.status_code

    @app.post("/api/v1/countries")
    def get_country_population():
        """
        Population of a country
        ---
        tags: [Countries]
        consumes:
          - text/plain
        parameters:
          - in: body
            name: body
            required: true
            schema: {type: string, example: "Spain"}
        responses:
          200:
            description: Population reported by the SOAP service
            schema: {type: integer, example: 46704314}
          400:
            description: Body is not valid UTF-8
          502:
            description: Transport failure, unreadable reply or SOAP fault
            schema:
              type: object
              properties:
                error: {type: string}
                kind: {type: string, enum: [transport, marshalling, remote_fault]}
        """
        try:
            country = request.get_data().decode("utf-8")
        except UnicodeDecodeError as e:
            return jsonify(error=f"Country name is not valid UTF-8: {e}", kind="bad_request"), 400
        response = country_client.get_country(country)
        return jsonify(response.country.population)

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    return app


# ---------------------------------------------------
# Run
# ---------------------------------------------------
if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Forwarding to SOAP endpoint %s", settings.soap_endpoint_url)
    app = create_app(settings=settings)
    print(f"Swagger UI: http://localhost:{settings.http_port}/apidocs")
    app.run(host=settings.http_host, port=settings.http_port, debug=False)
