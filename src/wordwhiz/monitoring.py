"""Monitoring configuration for WordWhiz."""
from prometheus_client import Counter, Histogram, start_http_server

# Word source metrics
words_fetched = Counter(
    "wordwhiz_words_fetched_total",
    "Total number of word records fetched and normalized",
)

word_fetch_failures = Counter(
    "wordwhiz_word_fetch_failures_total",
    "Total number of failed word fetch attempts",
    ["error_type"],
)

word_substitutions = Counter(
    "wordwhiz_word_substitutions_total",
    "Total number of times a random word replaced the requested one",
    ["reason"],
)

thesaurus_request_duration = Histogram(
    "wordwhiz_thesaurus_request_duration_seconds",
    "Duration of thesaurus API requests in seconds",
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Quiz metrics
quizzes_generated = Counter(
    "wordwhiz_quizzes_generated_total",
    "Total number of quizzes generated",
)

quiz_generation_exhausted = Counter(
    "wordwhiz_quiz_generation_exhausted_total",
    "Total number of quizzes abandoned because the attempt budget ran out",
)

quiz_results_recorded = Counter(
    "wordwhiz_quiz_results_recorded_total",
    "Total number of quiz results recorded",
)

quiz_score = Histogram(
    "wordwhiz_quiz_score_percent",
    "Percentage score of recorded quizzes",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Learning metrics
words_marked_learned = Counter(
    "wordwhiz_words_marked_learned_total",
    "Total number of mark-learned operations",
)

rejected_words = Counter(
    "wordwhiz_rejected_words_total",
    "Total number of words rejected as invalid input",
    ["operation"],
)

# Storage metrics
storage_errors = Counter(
    "wordwhiz_storage_errors_total",
    "Total number of key-value storage errors",
    ["operation"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
