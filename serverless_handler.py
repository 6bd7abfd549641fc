import json
import traceback

from serverless_wsgi import handle_request


def handler(event, context):
    """WSGI handler for API Gateway requests"""
    try:
        # Get API response
        from resume_html_to_docx.api import application

        return handle_request(application, event, context)
    except Exception as e:
        print(f"ERROR: {str(e)}")
        print(traceback.format_exc())
        return {
            "statusCode": 500,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps({"error": str(e)}),
        }
