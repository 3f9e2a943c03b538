"""HTML landing pages for the email confirmation link."""

from html import escape

PAGE_TITLE = "Email Verification"

_ERROR_STYLE = """
    body { font-family: Arial, sans-serif; padding: 40px; text-align: center; }
    .error { color: #ef4444; }
"""

_SUCCESS_STYLE = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
      min-height: 100vh;
      display: flex;
      align-items: center;
      justify-content: center;
      margin: 0;
      padding: 20px;
    }
    .container {
      background: white;
      padding: 40px;
      border-radius: 12px;
      box-shadow: 0 20px 40px rgba(0,0,0,0.1);
      text-align: center;
      max-width: 400px;
      width: 100%;
    }
    .success { color: #10b981; font-size: 48px; margin-bottom: 20px; }
    h1 { color: #1f2937; margin-bottom: 16px; font-size: 24px; }
    p { color: #6b7280; margin-bottom: 24px; line-height: 1.6; }
"""


def _page(style: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{PAGE_TITLE}</title>
  <style>{style}</style>
</head>
<body>
{body}
</body>
</html>
"""


def error_page(heading: str, message: str) -> str:
    body = f"""  <div class="error">
    <h1>{escape(heading)}</h1>
    <p>{escape(message)}</p>
    <a href="/">Return to App</a>
  </div>"""
    return _page(_ERROR_STYLE, body)


def invalid_link_page() -> str:
    return error_page("Invalid Verification Link", "This verification link is invalid or has expired.")


def verification_failed_page(reason: str) -> str:
    return error_page("Verification Failed", reason)


def unexpected_error_page() -> str:
    return error_page("Verification Error", "An unexpected error occurred. Please try again.")


def success_page() -> str:
    body = """  <div class="container">
    <div class="success">&#10003;</div>
    <h1>Email Verified Successfully!</h1>
    <p>Your account has been created and verified. You can now use the Text Enhancement API.</p>
    <p>You can close this window and return to the app to sign in.</p>
  </div>"""
    return _page(_SUCCESS_STYLE, body)
