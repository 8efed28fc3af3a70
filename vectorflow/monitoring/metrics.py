"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram

uploads_total = Counter("vectorflow_uploads_total",
                        "Total number of uploads started")
upload_errors_total = Counter(
    "vectorflow_upload_errors_total", "Total number of failed uploads", ["kind"])
upload_duration_seconds = Histogram(
    "vectorflow_upload_duration_seconds", "Upload processing duration", buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0])

questions_total = Counter("vectorflow_questions_total",
                          "Total number of questions answered")
question_errors_total = Counter(
    "vectorflow_question_errors_total", "Total number of questions answered with an error")
answer_duration_seconds = Histogram(
    "vectorflow_answer_duration_seconds", "Answer generation duration", buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0])
