"""
Generation pipeline.

Runs one page through parse, classify, analyze, synthesize and render:

    html -> Document -> ElementRecords -> (FormRecords, WorkflowInference)
         -> PageObject / TestSuite IR -> Cypress sources

The pipeline is synchronous and pure; fetching the HTML is the renderer's
job and writing the sources is the workspace's.
"""

from __future__ import annotations

import structlog

from cypressgen.config import GeneratorConfig
from cypressgen.document import Document
from cypressgen.extraction.classifier import ElementClassifier
from cypressgen.extraction.naming import parse_source_url, resolve_feature_name, to_class_name
from cypressgen.extraction.structure import StructuralAnalyzer
from cypressgen.models import GenerationResult
from cypressgen.synthesis.cypress import CypressRenderer
from cypressgen.synthesis.page_object import ClassSynthesizer
from cypressgen.synthesis.test_suite import TestSynthesizer

logger = structlog.get_logger(__name__)


class Generator:
    """
    Generates a Cypress page object and test suite for one page.

    A Generator holds no per-run state; each ``generate`` call starts with a
    fresh identifier registry.
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self._classifier = ElementClassifier()
        self._analyzer = StructuralAnalyzer()
        self._class_synthesizer = ClassSynthesizer(self.config)
        self._test_synthesizer = TestSynthesizer(self.config)
        self._renderer = CypressRenderer(self.config.language)
        self._log = logger.bind(component="generator")

    def generate(
        self,
        html_or_document: str | Document,
        url: str,
        page_object_name: str | None = None,
        instructions: str | None = None,
    ) -> GenerationResult:
        """
        Generate sources for the page at ``url``.

        Args:
            html_or_document: Rendered HTML or an already parsed Document
            url: Absolute URL the page was rendered from
            page_object_name: Overrides the inferred feature name
            instructions: Free-text guidance; accepted but does not affect output

        Raises:
            MalformedUrlError: If ``url`` is not absolute
        """
        url = url.strip() if url else url
        parse_source_url(url)

        if instructions:
            self._log.info("Instructions received", instructions=instructions)

        document = (
            html_or_document
            if isinstance(html_or_document, Document)
            else Document.parse(html_or_document)
        )

        elements = self._classifier.classify(document)
        forms, workflow = self._analyzer.analyze(document, elements)

        feature_name = resolve_feature_name(document, url, page_object_name)
        class_name = to_class_name(feature_name, self.config.class_suffix)

        page_object = self._class_synthesizer.synthesize(class_name, elements, workflow, url)
        suite = self._test_synthesizer.synthesize(
            class_name, feature_name, url, elements, forms, workflow
        )

        result = GenerationResult(
            class_name=class_name,
            feature_name=feature_name,
            class_source=self._renderer.render_page_object(page_object),
            test_source=self._renderer.render_test_suite(suite),
            elements=elements,
            forms=forms,
            workflow=workflow,
            source_url=url,
            language=self.config.language.value,
        )

        self._log.info(
            "Generated page object",
            url=url,
            class_name=class_name,
            elements=len(elements),
            forms=len(forms),
            tests=len(suite.walk_cases()),
        )
        return result


def generate(
    html_or_document: str | Document,
    url: str,
    page_object_name: str | None = None,
    instructions: str | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Generate sources for one page with a throwaway Generator."""
    return Generator(config).generate(html_or_document, url, page_object_name, instructions)
