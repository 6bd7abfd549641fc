import argparse
import logging
import os
from io import BytesIO
from pathlib import Path
from typing import Any

import yaml
from flask import Flask, request, send_file
from flask.wrappers import Response
from flask_restx import Api, Resource, fields

from resume_html_to_docx.config import ConfigLoader
from resume_html_to_docx.converter import DOCX_MIMETYPE, render_docx

logging.basicConfig(
    level=logging.INFO,
    datefmt="%Y-%m-%d %H:%M:%S",
    format="%(asctime)s.%(msecs)d %(levelname)-8s [%(processName)s] [%(threadName)s] %(filename)s:%(funcName)s:%(lineno)d --- %(message)s",
)

logger = logging.getLogger(__name__)

SCRIPT_DIR = Path(__file__).parent
API_CONFIG_FILE = Path("api_config.yaml")
DEFAULT_FILENAME = "Resume.docx"


class ApiConfig:
    """Application configuration class"""

    def __init__(self, api_config_file: Path):
        """Initialize the application configuration

        Args:
            api_config_file (Path): Path to the API configuration file
        """

        self._config_file = api_config_file
        self._config_file_realpath = api_config_file.absolute().resolve()
        self._config = self.load_app_config()

    @property
    def config_file(self) -> Path:
        return Path(self._config_file)

    @property
    def config(self) -> dict:
        """Get the entire configuration dictionary

        Returns:
            dict: Complete configuration dictionary
        """
        return self._config

    @property
    def server(self) -> dict:
        """Get the server settings (host, port)

        Returns:
            dict: Server configuration
        """
        return self._config.get("server") or {}

    @property
    def mimetypes(self) -> dict[str, list[str]]:
        """Get mimetypes settings

        Returns:
            dict: Mimetypes configuration
        """
        return self._config.get("mimetypes", {})

    @property
    def cors(self) -> dict:
        """Get cors settings

        Returns:
            dict: Cors configuration
        """
        return self._config.get("cors", {})

    @property
    def logging(self) -> dict:
        """Get logging settings

        Returns:
            dict: Logging configuration
        """
        return self._config.get("logging", {})

    @property
    def output(self) -> dict:
        """Get output settings

        Returns:
            dict: Output configuration
        """
        return self._config.get("output", {})

    def load_app_config(self) -> dict[str, Any]:
        """Load API configuration from api_config.yaml

        Returns:
            dict: Application configuration, empty when the file is unusable
        """
        if not os.path.exists(self._config_file_realpath):
            logger.warning(f"{self._config_file_realpath} not found, using defaults")
            return {}

        try:
            with open(
                self._config_file_realpath, "r", encoding="utf-8", errors="replace"
            ) as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading app config: {e}")
            return {}

        return config if isinstance(config, dict) else {}


class BaseApi:
    """Base class for Flask application"""

    def __init__(self, api_config_file: Path):
        """Initialize the API Base

        Args:
            api_config_file (Path): Path to the API configuration file
        """
        api_config = ApiConfig(api_config_file)

        app = Flask(__name__)

        self._app = app
        self._api_config = api_config
        self._api = Api(
            app,
            version="1.0",
            title="HTML Resume to DOCX API",
            description="API for exporting HTML resumes as Word documents",
            doc="/swagger",
        )
        self._ns = self._api.namespace("api", description="Resume export operations")

        self._app.logger.debug(f"API server: {self._api_config.server}")
        self._app.logger.debug(f"API mimetypes: {self._api_config.mimetypes}")
        self._app.logger.debug(f"API cors: {self._api_config.cors}")
        self._app.logger.debug(f"API output: {self._api_config.output}")

        self._configure_logging()
        self._configure_cors()

    @property
    def app(self) -> Flask:
        """Get the Flask application instance

        Returns:
            Flask: Flask application instance
        """
        return self._app

    @property
    def api(self) -> Api:
        return self._api

    @property
    def api_config(self) -> ApiConfig:
        return self._api_config

    @property
    def ns(self) -> Api:
        """Get the namespace instance

        Returns:
            Api: Namespace instance
        """
        return self._ns

    def run(
        self,
        program_description: str = None,
        epilog_text: str = None,
        argv: list[str] | None = None,
    ) -> None:
        """Run the Flask development server

        Args:
            program_description (str): Description of the program
            epilog_text (str): Epilog text for the help message
            argv (list[str], optional): Command line arguments, defaults to sys.argv
        """
        parser = argparse.ArgumentParser(
            description=program_description,
            epilog=epilog_text,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "-c",
            "--config",
            dest="config_file",
            help="Path to YAML configuration file",
            default=self._api_config.config_file,
        )
        parser.add_argument("--host", dest="host", help="Host to bind")
        parser.add_argument("--port", dest="port", type=int, help="Port to bind")
        parser.add_argument(
            "--debug",
            action="store_true",
            dest="debug",
            help="Enable debug mode for the Flask application",
            default=False,
        )

        args = parser.parse_args(argv)

        config_file = Path(args.config_file)
        if config_file != self._api_config.config_file:
            self._api_config = ApiConfig(config_file)
            self._configure_logging()
            self._configure_cors()

        self._app.run(
            host=args.host or self._api_config.server.get("host"),
            port=args.port or self._api_config.server.get("port"),
            debug=args.debug,
        )

    def _configure_logging(self) -> None:
        """Configure logging for the API"""
        log_level_name = str(self._api_config.logging.get("level", "INFO")).upper()
        self._app.logger.setLevel(getattr(logging, log_level_name, logging.INFO))
        self._app.logger.info(f"Logging level set to {log_level_name}")

    def _configure_cors(self) -> None:
        """Configure CORS for the API"""
        cors_config = self._api_config.cors
        if cors_config.get("enabled", False):
            from flask_cors import CORS

            self._app.logger.info(f"Configuring CORS with: {cors_config}")
            CORS(
                self._app,
                resources={
                    r"/api/*": {
                        "origins": cors_config.get("origins", "*"),
                        "expose_headers": cors_config.get(
                            "expose_headers", ["Content-Disposition"]
                        ),
                    }
                },
                supports_credentials=cors_config.get("supports_credentials", False),
            )
        else:
            self._app.logger.info("CORS disabled")


class App(BaseApi):
    """API class for handling resume export"""

    def __init__(self, api_config_file: Path):
        """Initialize the API

        Args:
            api_config_file (Path): Path to the API configuration file
        """
        super().__init__(api_config_file)

        self._request_model = self._api.model(
            "ExportRequest",
            {
                "content": fields.String(
                    required=True, description="HTML fragment of the resume"
                ),
                "filename": fields.String(
                    description=f"Download file name (default: {self.default_filename})"
                ),
                "config_options": fields.Raw(
                    description="Document configuration overrides (see resume_config.yaml)"
                ),
            },
        )
        self._response_model = self._api.model(
            "Response",
            {
                "success": fields.Boolean(
                    description="Whether the operation was successful"
                ),
                "message": fields.String(description="Status message"),
            },
        )

    @property
    def request_model(self):
        return self._request_model

    @property
    def response_model(self):
        """Get the standard response model

        Returns:
            Model: Response model
        """
        return self._response_model

    @property
    def default_filename(self) -> str:
        return self._api_config.output.get("default_filename", DEFAULT_FILENAME)

    @property
    def docx_mimetype(self) -> str:
        return (self._api_config.mimetypes.get("docx") or [DOCX_MIMETYPE])[0]

    def error_response(
        self, code: int, error: object, message: str = None, exc_info: bool = False
    ) -> tuple[dict[str, Any], int]:
        """Return a JSON error response

        Args:
            code (int): HTTP status code
            error (object): Error or error message to report
            message (str): Optional context prepended to the error
            exc_info (bool): Whether to log the active traceback

        Returns:
            tuple: JSON response with error message and status code
        """
        msg = f"{message}: {str(error)}" if message else str(error)
        self._app.logger.error(msg, exc_info=exc_info)
        return {
            "success": False,
            "message": msg,
        }, code

    def _response(self, document_bytes: bytes, filename: str) -> Response:
        """Build the download response for a generated document

        Args:
            document_bytes (bytes): Serialized document
            filename (str): Download file name

        Returns:
            Response: Flask response with the document attached
        """
        # download_name is quoted into Content-Disposition by send_file
        return send_file(
            BytesIO(document_bytes),
            mimetype=self.docx_mimetype,
            as_attachment=True,
            download_name=filename,
        )

    def post(self, payload: Any) -> Response | tuple[dict[str, Any], int]:
        """Export an HTML resume as a Word document

        Args:
            payload: Decoded JSON request body with content, filename and
                config_options

        Returns:
            Response: Flask response with the generated document, or a JSON
                error payload with its status code
        """
        if not isinstance(payload, dict):
            payload = {}

        content = payload.get("content")
        if not content:
            return self.error_response(400, "No content provided")
        if not isinstance(content, str):
            return self.error_response(400, "Content must be a string")

        config_options = payload.get("config_options")
        if config_options is not None and not isinstance(config_options, dict):
            return self.error_response(400, "config_options must be an object")

        filename = payload.get("filename") or self.default_filename
        self._app.logger.info(f"Exporting {len(content)} characters to {filename}")

        try:
            config_loader = ConfigLoader()
            if config_options:
                self._app.logger.info(f"Merging custom configuration: {config_options}")
                config_loader.merge(config_options)

            document_bytes = render_docx(content, config_loader)
            return self._response(document_bytes, filename)
        except Exception as e:
            return self.error_response(500, e, exc_info=True)


app = App(SCRIPT_DIR / API_CONFIG_FILE)


@app.ns.route("/export-docx", methods=["POST"])
class ExportDocxResource(Resource):
    @app.ns.doc("export_docx", consumes=["application/json"])
    @app.ns.expect(app.request_model)
    @app.ns.response(200, "Success - Returns DOCX file download")
    @app.ns.response(400, "Bad Request", app.response_model)
    @app.ns.response(500, "Server Error", app.response_model)
    def post(self) -> Response:
        """Export an HTML resume as a DOCX download

        The request body is JSON with the HTML `content`, an optional
        `filename` and optional `config_options` style overrides.

        Returns:
            Response: Flask response with the generated DOCX file
        """
        return app.post(request.get_json(silent=True))


def main(argv: list[str] | None = None) -> None:
    program_description = """
HTML Resume to DOCX API
--------------------------------
This API exports HTML resume fragments as Word documents.
"""

    epilog_text = """
Example usage:
# Start the API server
resume-html-to-docx-api --config api_config.yaml --debug

# Export a resume
curl -X POST "http://localhost:3000/api/export-docx" \\
-H "Content-Type: application/json" \\
-d '{"content": "<h1>Jane Doe</h1><p>Hello</p>", "filename": "Jane_Doe.docx"}' \\
-o Jane_Doe.docx
"""

    app.run(program_description, epilog_text, argv)


if __name__ == "__main__":
    main()

# Export the Flask application object, not the App class instance
# This is what serverless-wsgi needs - the actual Flask application
application = app.app
