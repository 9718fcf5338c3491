"""CleaningOptions Pydantic model -- independent boolean switches per run."""

from pydantic import BaseModel, ConfigDict, Field


class CleaningOptions(BaseModel):
    """Flat set of toggles controlling a single cleaning run.

    Field names are snake_case; the JSON payload uses the camelCase aliases
    the UI sends.  Every option defaults to off, and the model is frozen so
    it cannot change while a run is in progress.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    strip_comments: bool = Field(False, alias="stripComments")
    collapse_whitespace: bool = Field(False, alias="collapseWhitespace")
    minify_inline_css_js: bool = Field(False, alias="minifyInlineCSSJS")
    remove_empty_attributes: bool = Field(False, alias="removeEmptyAttributes")
    preserve_iframes: bool = Field(False, alias="preserveIframes")
    preserve_links: bool = Field(False, alias="preserveLinks")
    preserve_shortcodes: bool = Field(False, alias="preserveShortcodes")
    semantic_rewrite: bool = Field(False, alias="semanticRewrite")
    lazy_load_embeds: bool = Field(False, alias="lazyLoadEmbeds")
    lazy_load_images: bool = Field(False, alias="lazyLoadImages")
    optimize_css_loading: bool = Field(False, alias="optimizeCssLoading")
    optimize_font_loading: bool = Field(False, alias="optimizeFontLoading")
    add_prefetch_hints: bool = Field(False, alias="addPrefetchHints")
    defer_scripts: bool = Field(False, alias="deferScripts")

    def enabled_no_ops(self) -> list[str]:
        """Return the names of enabled options that have no transform."""
        return [name for name in NO_OP_OPTIONS if getattr(self, name)]


# Accepted for compatibility with the UI payload but never change the output.
# Nothing in the pipeline removes iframes, links or shortcode text, so the
# preserve_* switches are already satisfied.
NO_OP_OPTIONS = (
    "preserve_iframes",
    "preserve_links",
    "preserve_shortcodes",
    "optimize_css_loading",
    "add_prefetch_hints",
)
