import importlib.metadata

try:
    VERSION = importlib.metadata.version("iab-consent-api")
except importlib.metadata.PackageNotFoundError:
    # Not installed (e.g. running tests from a source checkout)
    VERSION = "0.0.0-dev"
