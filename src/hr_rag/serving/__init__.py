"""
Serving — FastAPI application exposing the chatbot over HTTP.

Routes: the Kakao skill webhook (``/kakao``), the admin PDF upload
(``/upload``) and its form (``/admin``), plus health checks.
"""
