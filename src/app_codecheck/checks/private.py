"""
Private API Check.

Classes of the legacy ``OC_`` layer that have public replacements and must not
be used by apps.
"""

from app_codecheck.checks.base import BaseCheck, register_check


@register_check("private")
class PrivateCheck(BaseCheck):
  description = "private"
  classes = [
    "OC_API",
    "OC_App",
    "OC_AppConfig",
    "OC_Avatar",
    "OC_BackgroundJob",
    "OC_Config",
    "OC_DB",
    "OC_Files",
    "OC_Helper",
    "OC_Hook",
    "OC_Image",
    "OC_JSON",
    "OC_L10N",
    "OC_Log",
    "OC_Mail",
    "OC_Preferences",
    "OC_Request",
    "OC_Response",
    "OC_Search_Provider",
    "OC_Search_Result",
    "OC_Template",
    "OC_User",
    "OC_Util",
  ]
