# ==============================================================
# CONSTANTS
# ==============================================================


PODFILE = "Podfile"
DEFAULT_PROJECT_NAME = "App"
DEFAULT_DEPLOYMENT_TARGET = "13.0"
DEFAULT_POD_COMMAND = "pod"

COCOAPODS_MIN_VERSION = "1.8.0"
COCOAPODS_NOT_FOUND_MESSAGE = (
    f"Please install version {COCOAPODS_MIN_VERSION} or greater from "
    "https://cocoapods.org/"
)

# Canonical declaration → pattern of accepted spellings
DECLARATION_PATTERNS = {
    "use_frameworks!": r"^use[-_]frameworks!?$",
    "inhibit_all_warnings!": r"^inhibit[-_]all[-_]warnings!?$",
    "use_modular_headers!": r"^use[-_]modular[-_]headers!?$",
}
