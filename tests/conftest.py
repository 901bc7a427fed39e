from hypothesis import settings

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("podscope-tests", database=None)
settings.load_profile("podscope-tests")
