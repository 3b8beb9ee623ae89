import functools
import logging

from flask import Flask, Response, request, current_app
from werkzeug.exceptions import HTTPException

from models import BaseModel
from review import ReviewHandler, encode_review
from scheme import SchemeDecoder, build_scheme
from exc import ApplicationError, BodyReadError

LOG = logging.getLogger(__name__)


class DEFAULTS:
    SCHEME = build_scheme
    HOST = "0.0.0.0"
    PORT = 7443
    TLS_CERT = "/etc/ssl/certs/tls.crt"
    TLS_KEY = "/etc/ssl/certs/tls.key"
    LOG_LEVEL = "INFO"


def jsonresponse():
    """Serializes a model returned by a view function into a JSON response."""

    def _outer(func):
        @functools.wraps(func)
        def _inner(*args, **kwargs):
            res = func(*args, **kwargs)
            if isinstance(res, BaseModel):
                body = encode_review(res)
                LOG.info("admission review response json marshalled: %s", body)
                return Response(body, 200, {"content-type": "application/json"})
            else:
                return res

        return _inner

    return _outer


def read_body() -> bytes:
    try:
        return request.get_data()
    except (HTTPException, OSError) as err:
        msg = f"error {err} reading request body"
        LOG.error(msg)
        raise BodyReadError(msg)


@jsonresponse()
def review_deployment():
    return current_app.handler.review(read_body())


def handle_applicationerror(err):
    LOG.error("admission review failed: %s", err)
    return str(err), err.status_code, {"content-type": "text/plain"}


def health():
    return "OK", 200, {"content-type": "text/plain"}


def create_app(**config) -> Flask:
    """Create the webhook application.

    Configuration comes from `DEFAULTS`, then from `ADMISSION_*` environment
    variables, then from keyword arguments. The scheme is built once here
    and handed to the review handler.
    """

    app = Flask(__name__)
    app.config.from_object(DEFAULTS)
    app.config.from_prefixed_env("ADMISSION")
    if config:
        app.config.update(config)

    app.handler = ReviewHandler(SchemeDecoder(app.config["SCHEME"]()))

    app.errorhandler(ApplicationError)(handle_applicationerror)
    app.add_url_rule("/healthz", view_func=health)
    app.add_url_rule("/validate", view_func=review_deployment, methods=["POST"])

    return app


def main():
    app = create_app()
    logging.basicConfig(level=app.config["LOG_LEVEL"])

    LOG.info("Server started ...")
    app.run(
        host=app.config["HOST"],
        port=int(app.config["PORT"]),
        ssl_context=(app.config["TLS_CERT"], app.config["TLS_KEY"]),
    )


if __name__ == "__main__":
    main()
