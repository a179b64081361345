"""Datalog query builders for the Roam backend API."""

_CONTENT_PULL = """[
  :block/string
  :node/title
  :block/uid
  :block/order
  :block/heading
  :block/open
  :children/view-type
  :block/text-align
  :edit/time
  :block/props
  {:block/children ...}
]"""


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def content_query(target: str, *, by_uid: bool = False) -> str:
    """Pull a whole page (by title) or block (by uid) with all descendants."""
    attribute = ":block/uid" if by_uid else ":node/title"
    return f"[:find (pull ?b {_CONTENT_PULL}) :where [?b {attribute} {_quote(target)}]]"


def page_title_by_block_uid_query(block_uid: str) -> str:
    return (
        "[:find (pull ?p [:node/title]) "
        f":where [?e :block/uid {_quote(block_uid)}] [?e :block/page ?p]]"
    )


def text_by_block_uid_query(block_uid: str) -> str:
    return f"[:find (pull ?e [:block/string]) :where [?e :block/uid {_quote(block_uid)}]]"


# Pages that have a "Documentation" child, paired with every page titled
# "<page>/...". Legacy pages are skipped.
DOCUMENTED_SUBPAGES_QUERY = """[:find
  (pull ?b [:node/title])
  (pull ?sub [:node/title])
 :where
  [?d :block/string "Documentation"]
  [?b :block/children ?d]
  [?b :node/title ?t]
  [not [[clojure.string/starts-with? ?t "legacy"]]]
  [?sub :node/title ?sub-title]
  [[clojure.string/starts-with? ?sub-title ?t]]
]"""
