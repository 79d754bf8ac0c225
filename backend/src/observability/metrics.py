"""Prometheus metrics for ContactFlow.

Defines operational metrics for the submission and verification flows.
"""

from prometheus_client import Counter

# outcome: new_submitter|unverified_resubmission|verified_submitter|rejected|error
contact_submissions_total = Counter(
    "contactflow_submissions_total",
    "Contact form submissions by outcome",
    ["outcome"]
)

# result: verified|invalid_token|rejected|error
contact_verifications_total = Counter(
    "contactflow_verifications_total",
    "Email verification attempts by result",
    ["result"]
)

# template: verification|admin_notification, status: success|error
contact_emails_sent_total = Counter(
    "contactflow_emails_sent_total",
    "Outbound emails handed to the mail gateway",
    ["template", "status"]
)
