from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr


FALLBACK_SCORE = 0
FALLBACK_MESSAGE = "Error processing AI response. Please try again."


class SignalModel(BaseModel):
    # In-page payloads use camelCase keys
    model_config = ConfigDict(populate_by_name=True)


# Page signal models
class PerformanceSignals(SignalModel):
    load_time: int = Field(default=0, alias="loadTime")
    dom_content_loaded: int = Field(default=0, alias="domContentLoaded")
    page_size: int = Field(default=0, ge=0, alias="pageSize")
    word_count: int = Field(default=0, ge=0, alias="wordCount")


class SecuritySignals(SignalModel):
    has_https: bool = Field(default=False, alias="hasHttps")
    has_csp: bool = Field(default=False, alias="hasCsp")


class MobileSignals(SignalModel):
    has_touch_icons: bool = Field(default=False, alias="hasTouchIcons")
    has_manifest: bool = Field(default=False, alias="hasManifest")
    small_font_count: int = Field(default=0, ge=0, alias="smallFontCount")
    viewport: Optional[str] = None


class MetaSignals(SignalModel):
    keywords: Optional[str] = None
    author: Optional[str] = None
    favicons: List[str] = Field(default_factory=list)


class NetworkStats(SignalModel):
    js_heap_used_size: int = Field(alias="JSHeapUsedSize")  # MB
    js_heap_total_size: int = Field(alias="JSHeapTotalSize")  # MB
    script_duration: int = Field(alias="ScriptDuration")  # ms
    task_duration: int = Field(alias="TaskDuration")  # ms


class PageSignals(SignalModel):
    title: str = ""
    meta_description: Optional[str] = Field(default=None, alias="metaDescription")
    canonical_url: Optional[str] = Field(default=None, alias="canonicalUrl")
    h1_count: int = Field(default=0, ge=0, alias="h1Count")
    h2_count: int = Field(default=0, ge=0, alias="h2Count")
    h3_count: int = Field(default=0, ge=0, alias="h3Count")
    images_without_alt: int = Field(default=0, ge=0, alias="imagesWithoutAlt")
    broken_images: int = Field(default=0, ge=0, alias="brokenImages")
    internal_links: int = Field(default=0, ge=0, alias="internalLinks")
    external_links: int = Field(default=0, ge=0, alias="externalLinks")
    performance: PerformanceSignals = Field(default_factory=PerformanceSignals)
    security: SecuritySignals = Field(default_factory=SecuritySignals)
    mobile: MobileSignals = Field(default_factory=MobileSignals)
    meta: MetaSignals = Field(default_factory=MetaSignals)
    network: Optional[NetworkStats] = None


# AI analysis models
class AnalysisResult(BaseModel):
    score: int = Field(ge=0, le=100)
    analysis: List[StrictStr] = Field(min_length=1)

    @classmethod
    def fallback(cls) -> "AnalysisResult":
        return cls(score=FALLBACK_SCORE, analysis=[FALLBACK_MESSAGE])


class ScreenshotResponse(BaseModel):
    success: bool = True
    screenshots: List[str]
