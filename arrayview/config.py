"""
The config module holds the runtime configuration of arrayview and is based on the Donfig
python library.

Values can be set programmatically::

    from arrayview.config import config

    config.set({"view.growth": "double"})

or with environment variables, where a double underscore ``__`` indicates nested access::

    export ARRAYVIEW_VIEW__GROWTH="double"

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from donfig import Config as DConfig


class BadConfigError(ValueError):
    pass


class Config(DConfig):
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "ARRAYVIEW_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    """

    def reset(self):
        self.clear()
        self.refresh()


# The default configuration for arrayview
config = Config(
    "arrayview",
    defaults=[
        {
            "view": {
                "dtype": "float64",
                "fill_value": 0,
                "growth": "exact",
            },
        }
    ],
)


def parse_growth(data):
    if data in ("exact", "double"):
        return data
    raise BadConfigError(f"Expected one of ('exact', 'double') for view.growth, got {data!r} instead.")
