"""Mirror a link aggregator's JSON feed into Gopher and Gemini documents."""

__version__ = "0.1.0"
