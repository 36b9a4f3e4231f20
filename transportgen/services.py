"""Discovery of annotated interfaces and dispatch to generation processors."""

from __future__ import annotations

import os

from transportgen.api import GenerationInfo, GoFile, HTTPMethod, Interface, MetricsPlaceholder


class ServicesProcessor:
    """Finds tagged interfaces in a parsed file and runs their processors.

    An interface comment ``<tag_mark> word word ...`` names the processors to
    run; a word holding the metrics tag may carry labels, as in
    ``metrics(region,kind)``.
    """

    def __init__(self, tag_mark: str, processors: dict, http_method_processor, metrics_tag: str):
        self.tag_mark = tag_mark
        self.processors = processors
        self.http_method_processor = http_method_processor
        self.metrics_tag = metrics_tag

    def process(self, info: GenerationInfo, file: GoFile, out_path: str) -> None:
        for go_iface in file.interfaces:
            for doc in go_iface.docs:
                text = doc.strip().removeprefix("//").strip()
                if text.startswith(self.tag_mark):
                    self._process_interface(info, go_iface, text, out_path)

    def _split_metrics(self, text: str) -> tuple[str, list[str]]:
        """Drop metrics labels from the tag words and return them separately."""
        labels: list[str] = []
        words = [self.tag_mark]
        for tag in text[len(self.tag_mark):].strip().split(" "):
            if self.metrics_tag in tag and "(" in tag:
                name, label_list = tag[:-1].split("(")[:2]
                words.append(name)
                labels = label_list.split(",")
            else:
                words.append(tag)
        return "".join(f"{word} " for word in words), labels

    def _process_interface(self, info: GenerationInfo, go_iface, text: str, out_path: str) -> None:
        text, labels = self._split_metrics(text)
        iface = Interface(
            iface=go_iface,
            rel_output_path=out_path,
            abs_output_path=os.path.abspath(out_path),
        )
        info.interfaces.append(iface)
        iface.http_methods = {}
        for method in go_iface.methods:
            http_method = HTTPMethod(
                additional_metrics_labels={
                    label.strip(): MetricsPlaceholder(name=label.strip()) for label in labels
                }
            )
            try:
                self.http_method_processor.process(http_method, iface, method)
            except Exception as exc:
                raise RuntimeError(f"[processor] method {method.name}: {exc}") from exc
            iface.http_methods[method.name] = http_method

        for word in text[len(self.tag_mark):].strip().split(" "):
            processor = self.processors.get(word)
            if processor is None:
                continue
            try:
                processor.process(info, iface)
            except Exception as exc:
                raise RuntimeError(f"[processor] {word}: {exc}") from exc