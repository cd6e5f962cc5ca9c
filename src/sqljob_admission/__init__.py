"""
sqljob_admission – admission control for scheduled SQL jobs.

Import path convention::

    from sqljob_admission.kernel.errors import AdmissionDeniedError
    from sqljob_admission.application.sqljob import SqlJob, SqlJobSpec
    from sqljob_admission.application.admission import AdmissionEngine, Operation
    from sqljob_admission.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
