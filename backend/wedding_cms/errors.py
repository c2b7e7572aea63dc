from flask import current_app, jsonify
from wedding_cms.domain.exceptions import CmsError, PublishFanoutError

def register_error_handlers(app):
    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        body = {
            "error": error.__class__.__name__,
            "message": str(error)
        }

        if isinstance(error, PublishFanoutError):
            body["applied"] = error.applied
            body["failed"] = error.failed

        if error.status_code >= 500:
            current_app.logger.error("%s: %s", body["error"], body["message"])

        response = jsonify(body)
        response.status_code = error.status_code
        return response
