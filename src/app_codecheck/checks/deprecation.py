"""
Deprecated Public API Check.

Values are the release that deprecated the entry. They document the list and
are not used for matching.
"""

from app_codecheck.checks.base import BaseCheck, register_check


@register_check("deprecation")
class DeprecationCheck(BaseCheck):
  description = "deprecated"
  classes = {
    "OCP\\AppFramework\\IApi": "8.0.0",
    "OCP\\Config": "8.0.0",
    "OCP\\Contacts": "8.1.0",
    "OCP\\DB": "8.1.0",
    "OCP\\IHelper": "8.1.0",
    "OCP\\JSON": "8.1.0",
    "OCP\\Response": "8.1.0",
    "OCP\\AppFramework\\Http\\IResponseSerializer": "8.1.0",
  }
  constants = {
    "OC_API::GUEST_AUTH": "8.0.0",
    "OC_API::USER_AUTH": "8.0.0",
    "OC_API::SUBADMIN_AUTH": "8.0.0",
    "OC_API::ADMIN_AUTH": "8.0.0",
    "OCP\\API::GUEST_AUTH": "8.1.0",
    "OCP\\API::USER_AUTH": "8.1.0",
    "OCP\\API::SUBADMIN_AUTH": "8.1.0",
    "OCP\\API::ADMIN_AUTH": "8.1.0",
  }
