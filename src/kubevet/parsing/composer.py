#!/usr/bin/env python3
"""
KUBEVET COMPOSER - Node Builder
-------------------------------
Turns raw YAML text into KubeVet nodes. ruamel.yaml composes the stream
into representation nodes (resolved tag + start mark, no Python object
construction), which are then copied into the immutable node model.

Scalars keep their source text; the resolved YAML tag decides the
TypeTag, so `port: 80` is INT while `port: "80"` is STR (quoted).

Author: KubeVet Team
Date: 2026-10-19
"""

import logging
from typing import Dict, List, Optional, Set

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode

from kubevet.core.errors import DocumentParseError
from kubevet.core.models import Mapping, Node, Scalar, Sequence, TypeTag

logger = logging.getLogger("kubevet.parsing")

_YAML_TAGS: Dict[str, TypeTag] = {
    "tag:yaml.org,2002:str": TypeTag.STR,
    "tag:yaml.org,2002:int": TypeTag.INT,
    "tag:yaml.org,2002:float": TypeTag.FLOAT,
    "tag:yaml.org,2002:bool": TypeTag.BOOL,
    "tag:yaml.org,2002:null": TypeTag.NULL,
}


def type_tag_for(yaml_tag: Optional[str]) -> TypeTag:
    if yaml_tag is None:
        return TypeTag.OTHER
    return _YAML_TAGS.get(str(yaml_tag), TypeTag.OTHER)


class NodeComposer:
    """
    Builds KubeVet nodes from ruamel.yaml representation nodes.
    A fresh YAML instance is created per call; composer state is never
    shared between documents or threads.
    """

    def compose_documents(self, text: str) -> List[Optional[Node]]:
        """
        Composes every document of the stream, in order.
        Raises DocumentParseError when the stream is not valid YAML.
        """
        yaml = YAML(typ="rt")
        # BOM left over from editors on Windows
        text = text.lstrip("\ufeff")
        try:
            raw_docs = list(yaml.compose_all(text))
        except YAMLError as e:
            mark = getattr(e, "problem_mark", None) or getattr(e, "context_mark", None)
            line = mark.line + 1 if mark is not None else 0
            logger.info(f"YAML composition failed at line {line}: {e}")
            raise DocumentParseError("cannot parse document", line)
        except RecursionError:
            logger.info("YAML composition failed: nesting too deep")
            raise DocumentParseError("cannot parse document", 0)

        logger.debug(f"Composed {len(raw_docs)} document(s)")
        try:
            return [self.convert(doc, set(), {}) if doc is not None else None for doc in raw_docs]
        except RecursionError:
            logger.info("Node conversion failed: nesting too deep")
            raise DocumentParseError("cannot parse document", 0)

    def convert(self, raw, _active: Optional[Set[int]] = None,
                _done: Optional[Dict[int, Node]] = None) -> Node:
        """
        Recursively copies one ruamel.yaml node into the KubeVet model.
        Collections reached again through an alias are converted once and
        shared, since nodes are immutable.
        """
        line = raw.start_mark.line + 1 if raw.start_mark is not None else 0

        if isinstance(raw, (MappingNode, SequenceNode)):
            active = _active if _active is not None else set()
            done = _done if _done is not None else {}
            # An alias pointing at one of its own ancestors
            if id(raw) in active:
                raise DocumentParseError("cannot parse document", line)
            if id(raw) in done:
                return done[id(raw)]
            active.add(id(raw))
            try:
                if isinstance(raw, MappingNode):
                    pairs = tuple(
                        (self._key_text(key_node), self.convert(value_node, active, done))
                        for key_node, value_node in raw.value
                    )
                    node: Node = Mapping(pairs=pairs, line=line)
                else:
                    node = Sequence(items=tuple(self.convert(item, active, done) for item in raw.value), line=line)
            finally:
                active.discard(id(raw))
            done[id(raw)] = node
            return node

        if isinstance(raw, ScalarNode):
            return Scalar(
                value=raw.value,
                tag=type_tag_for(raw.tag),
                line=line,
                quoted=raw.style in ("'", '"'),
            )

        raise DocumentParseError(f"unsupported node type {type(raw).__name__}", line)

    def _key_text(self, key_node) -> str:
        # Complex keys (mappings/sequences as keys) can never name a schema field.
        if isinstance(key_node, ScalarNode):
            return key_node.value
        return f"<{type(key_node).__name__}>"


def compose_documents(text: str) -> List[Optional[Node]]:
    return NodeComposer().compose_documents(text)
