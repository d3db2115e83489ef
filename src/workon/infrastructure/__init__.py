"""Infrastructure layer: filesystem walks and subprocess adapters.

Adapters raise standard exceptions (``OSError``,
``subprocess.CalledProcessError``, ``ValueError``); the service layer turns
them into a failed ServiceResult.
"""
