"""JUnit XML report formatter."""

from __future__ import annotations

from xml.dom import minidom
from xml.etree.ElementTree import Element, SubElement, tostring

from ..results import FeatureResult
from .base import CollectingFormatter


class JUnitFormatter(CollectingFormatter):
    """Writes a ``<testsuites>`` document: a suite per feature, a case per scenario."""

    def format_all(self, features: list[FeatureResult]) -> str:
        root = Element("testsuites")

        for feature in features:
            suite = SubElement(root, "testsuite")
            suite.set("name", feature.name)
            suite.set("tests", str(len(feature.scenarios)))
            suite.set("failures", str(self._count(feature, "failed")))
            not_run = len(feature.scenarios) - self._count(feature, "passed", "failed")
            suite.set("skipped", str(not_run))
            suite.set("time", f"{feature.duration:.6f}")

            for scenario in feature.scenarios:
                case = SubElement(suite, "testcase")
                case.set("classname", feature.name)
                case.set("name", scenario.name)
                case.set("time", f"{scenario.duration:.6f}")

                status = scenario.status
                if status == "failed":
                    failure = SubElement(case, "failure")
                    failed = [s for s in scenario.steps if s.status == "failed"]
                    failure.set("message", f"{failed[0].keyword}{failed[0].text}")
                    failure.text = self._step_listing(scenario)
                elif status != "passed":
                    skipped = SubElement(case, "skipped")
                    skipped.set("message", status)

        xml_str = tostring(root, encoding="unicode")
        return minidom.parseString(xml_str).toprettyxml(indent="  ")

    def _count(self, feature: FeatureResult, *statuses: str) -> int:
        return sum(1 for s in feature.scenarios if s.status in statuses)

    def _step_listing(self, scenario) -> str:
        lines = []
        for step in scenario.steps:
            lines.append(f"{step.keyword}{step.text} ... {step.status}")
            if step.error_message:
                lines.append(step.error_message)
        return "\n".join(lines)
