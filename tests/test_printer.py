"""Tests for the canonical printer layout."""

from __future__ import annotations

import logging

import pytest

from turtlefmt import FormatOptions, Identical, Mode, Patch, format_turtle, reconcile
from turtlefmt.constants import RDF_NS
from turtlefmt.core import DepthLimitExceededError
from turtlefmt.diagnostics import DiagnosticCode, TurtleSyntaxError
from turtlefmt.syntax import (
    Collection,
    Document,
    IriRef,
    PredicateObjects,
    Triples,
    TurtlePrinter,
    parse,
    print_document,
)

EX = "@prefix ex: <http://example.com/> .\n"


def fmt(source: str, **options: int) -> str:
    return format_turtle(source, FormatOptions(**options))


# ============================================================================
# SCENARIOS
# ============================================================================


class TestScenarios:
    """End-to-end examples of the formatter's contract."""

    def test_canonical_input_is_a_fixed_point(self) -> None:
        """<s> a <o> . only gains the trailing newline."""
        assert fmt("<s> a <o> .") == "<s> a <o> .\n"
        assert reconcile("<s> a <o> .\n", fmt("<s> a <o> .")) == Identical()

    def test_integer_leading_zero_trimmed(self) -> None:
        """+01 becomes +1; the prefix line is kept verbatim."""
        source = "@prefix ex: <http://example.com/> .\n<s> <p> +01 ."

        assert fmt(source) == "@prefix ex: <http://example.com/> .\n<s> <p> +1 .\n"

    def test_sparql_prefix_to_turtle(self) -> None:
        """PREFIX without '.' becomes @prefix with '.'."""
        assert fmt("PREFIX ex: <http://example.com/>") == "@prefix ex: <http://example.com/> .\n"

    def test_property_list_subject_block(self) -> None:
        """A multi-group blank node subject opens a block."""
        source = EX + "[ ex:p ex:o , ex:o2 ; ex:p2 ex:o3 ] ex:p3 true ."

        assert fmt(source) == EX + (
            "[\n"
            "    ex:p ex:o , ex:o2 ;\n"
            "    ex:p2 ex:o3\n"
            "] ex:p3 true .\n"
        )

    def test_comment_only_file_needs_no_patch(self) -> None:
        """A lone comment with its newline is already canonical."""
        source = "# hello\n"

        assert reconcile(source, fmt(source), Mode.CHECK) == Identical()

    def test_unterminated_iri_points_at_opening_bracket(self) -> None:
        """Formatting invalid input raises at the '<'."""
        with pytest.raises(TurtleSyntaxError) as exc_info:
            fmt("<s> <p> <http://example.com")

        assert exc_info.value.position == 8
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNTERMINATED_IRI


# ============================================================================
# STATEMENTS
# ============================================================================


class TestStatementLayout:
    """Directives and triples."""

    def test_base_directives(self) -> None:
        """Both spellings of base print as @base."""
        assert fmt("BASE <b/>\n@base   <c/>.") == "@base <b/> .\n@base <c/> .\n"

    def test_groups_on_indented_lines(self) -> None:
        """Further predicate groups go one level deeper."""
        source = "<s> <p> <o> ; <q> <r> ; <t> <u> ."

        assert fmt(source) == "<s> <p> <o> ;\n    <q> <r> ;\n    <t> <u> .\n"

    def test_object_list(self) -> None:
        """Objects are joined by ' , '."""
        assert fmt("<s> <p> <a>,<b>,<c>.") == "<s> <p> <a> , <b> , <c> .\n"

    def test_redundant_semicolons_dropped(self) -> None:
        """Empty groups do not print."""
        assert fmt("<s> <p> <o> ;;; .") == "<s> <p> <o> .\n"

    def test_one_statement_per_line(self) -> None:
        """Statements sharing a source line are split."""
        assert fmt("<a> <b> <c> . <d> <e> <f> .") == "<a> <b> <c> .\n<d> <e> <f> .\n"

    def test_source_indentation_ignored(self) -> None:
        """The source layout never leaks into the output."""
        source = "<s>\n\t\t<p>\n  <o>   ;\n<q>\n<r>\n."

        assert fmt(source) == "<s> <p> <o> ;\n    <q> <r> .\n"

    def test_indentation_option(self) -> None:
        """indentation sets the width of one level."""
        assert fmt("<s> <p> <o> ; <q> <r> .", indentation=2) == "<s> <p> <o> ;\n  <q> <r> .\n"

    def test_crlf_input(self) -> None:
        """Output always uses LF."""
        assert fmt("<a> <b> <c> .\r\n<d> <e> <f> .\r\n") == "<a> <b> <c> .\n<d> <e> <f> .\n"

    def test_empty_document(self) -> None:
        """An empty document prints as a single newline."""
        assert fmt("") == "\n"
        assert fmt("  \n\n\t") == "\n"


# ============================================================================
# NESTED TERMS
# ============================================================================


class TestNestedLayout:
    """Collections and blank node property lists."""

    def test_empty_collection(self) -> None:
        """()"""
        assert fmt("<s> <p> ( ) .") == "<s> <p> () .\n"

    def test_atomic_collection_inline(self) -> None:
        """( a b c ) on one line."""
        assert fmt("<s> <p> (1\n2 3).") == "<s> <p> ( 1 2 3 ) .\n"

    def test_nested_collection_block(self) -> None:
        """A non-atomic element puts every element on its own line."""
        assert fmt("<s> <p> (1 (2)) .") == "<s> <p> (\n        1\n        ( 2 )\n    ) .\n"

    def test_anon_in_collection_is_atomic(self) -> None:
        """[] counts as atomic."""
        assert fmt("<s> <p> ( [ ] _:b ) .") == "<s> <p> ( [] _:b ) .\n"

    def test_single_pair_property_list_inline(self) -> None:
        """[ p o ] with one atomic object stays inline."""
        assert fmt("<s> <p> [<q> <r>] .") == "<s> <p> [ <q> <r> ] .\n"

    def test_property_list_with_object_list_is_block(self) -> None:
        """Two objects make a block."""
        assert fmt("<s> <p> [ <q> <r> , <t> ] .") == "<s> <p> [\n        <q> <r> , <t>\n    ] .\n"

    def test_property_list_with_nested_object_is_block(self) -> None:
        """A non-atomic object makes a block."""
        assert fmt("<s> <p> [ <q> ( 1 ) ] .") == "<s> <p> [\n        <q> ( 1 )\n    ] .\n"

    def test_block_contents_below_their_group(self) -> None:
        """Contents sit one level below the predicate group, the ']' on its level."""
        source = "<s> <p> [ <a> <b> ; <c> <d> ] ; <q> <r> ."

        assert fmt(source) == (
            "<s> <p> [\n"
            "        <a> <b> ;\n"
            "        <c> <d>\n"
            "    ] ;\n"
            "    <q> <r> .\n"
        )

    def test_block_in_later_group(self) -> None:
        """Every group of a statement is at the same level."""
        source = "<s> <p> <o> ; <q> [ <a> <b> ; <c> <d> ] ."

        assert fmt(source) == (
            "<s> <p> <o> ;\n"
            "    <q> [\n"
            "        <a> <b> ;\n"
            "        <c> <d>\n"
            "    ] .\n"
        )

    def test_collection_block_before_next_group(self) -> None:
        """')' closes on the group level before ' ;'."""
        source = "<s> <p> ( 1 [ <a> <b> ] ( 2 ) ) ; <q> <r> ."

        assert fmt(source) == (
            "<s> <p> (\n"
            "        1\n"
            "        [ <a> <b> ]\n"
            "        ( 2 )\n"
            "    ) ;\n"
            "    <q> <r> .\n"
        )

    def test_multiline_object_after_atomic_starts_own_line(self) -> None:
        """A block after ' ,' opens on a new line one level deeper."""
        source = "<s> <p> <o1> , [ <a> <b> ; <c> <d> ] ."

        assert fmt(source) == (
            "<s> <p> <o1> ,\n"
            "        [\n"
            "            <a> <b> ;\n"
            "            <c> <d>\n"
            "        ] .\n"
        )

    def test_consecutive_multiline_objects(self) -> None:
        """Each later block object gets its own line."""
        source = "<s> <p> ( ( 1 ) ) , ( ( 2 ) ) , <o> ."

        assert fmt(source) == (
            "<s> <p> (\n"
            "        ( 1 )\n"
            "    ) ,\n"
            "        (\n"
            "            ( 2 )\n"
            "        ) , <o> .\n"
        )

    def test_inline_objects_stay_joined(self) -> None:
        """Single-line collections and property lists are comma-joined."""
        source = "<s> <p> <o1> , ( 1 2 ) , [ <q> <r> ] ."

        assert fmt(source) == "<s> <p> <o1> , ( 1 2 ) , [ <q> <r> ] .\n"

    def test_property_list_subject_alone(self) -> None:
        """[ ... ] . without further predicates."""
        assert fmt("[ <p> <o> ] .") == "[ <p> <o> ] .\n"

    def test_collection_subject_block(self) -> None:
        """A subject block indents from column 0."""
        assert fmt("( ( 1 ) ) <p> <o> .") == "(\n    ( 1 )\n) <p> <o> .\n"

    def test_deep_nesting(self) -> None:
        """Each level adds one indentation unit."""
        source = "<s> <p> [ <a> [ <b> <c> ; <d> <e> ] ; <f> <g> ] ."

        assert fmt(source) == (
            "<s> <p> [\n"
            "        <a> [\n"
            "            <b> <c> ;\n"
            "            <d> <e>\n"
            "        ] ;\n"
            "        <f> <g>\n"
            "    ] .\n"
        )

    def test_nesting_follows_indentation_option(self) -> None:
        """Nested levels use the configured unit."""
        source = "<s> <p> [ <a> <b> ; <c> <d> ] ; <q> <r> ."

        assert fmt(source, indentation=2) == (
            "<s> <p> [\n"
            "    <a> <b> ;\n"
            "    <c> <d>\n"
            "  ] ;\n"
            "  <q> <r> .\n"
        )

    def test_nested_layout_is_a_fixed_point(self) -> None:
        """Formatting nested output again changes nothing."""
        source = "<s> <p> <o1> , [ <a> ( 1 [ <b> <c> ; <d> <e> ] ) ; <f> <g> ] ; <q> ( ( 1 ) ) ."
        once = fmt(source)

        assert fmt(once) == once


# ============================================================================
# TERMS
# ============================================================================


class TestTermSpelling:
    """Normalized spellings inside statements."""

    def test_strings(self) -> None:
        """Quote style and unnecessary escapes are normalized."""
        source = "<s> <p> 'it\\'s' , \"a\\u0062\" , '''x''' , \"\"\"l1\nl2\"\"\" ."

        assert fmt(source) == '<s> <p> "it\'s" , "ab" , "x" , """l1\nl2""" .\n'

    def test_typed_literals_use_bare_tokens(self) -> None:
        """xsd:integer and xsd:boolean literals print as their token."""
        source = (
            '<s> <p> "1"^^<http://www.w3.org/2001/XMLSchema#integer> , '
            '"true"^^<http://www.w3.org/2001/XMLSchema#boolean> .'
        )

        assert fmt(source) == "<s> <p> 1 , true .\n"

    def test_typed_literal_prefixed_datatype(self) -> None:
        """The datatype resolves through the prefix in effect."""
        xsd = "@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .\n"
        source = xsd + '<s> <p> "+01.50"^^xsd:decimal , "1E3"^^xsd:double , "1"^^xsd:decimal .'

        assert fmt(source) == xsd + '<s> <p> +1.5 , 1e3 , "1"^^xsd:decimal .\n'

    def test_typed_literal_with_other_datatype_kept(self) -> None:
        """Datatypes without a token form keep the typed spelling."""
        source = '<s> <p> "1"^^<http://www.w3.org/2001/XMLSchema#int> .'

        assert fmt(source) == source + "\n"

    def test_non_printable_characters_escaped(self) -> None:
        """C1 controls and Unicode separators print as \\u escapes."""
        assert fmt('<s> <p> "a\x85b\u2028c\u200bd" .') == '<s> <p> "a\\u0085b\\u2028c\\u200Bd" .\n'

    def test_language_tag_case_preserved(self) -> None:
        """Language tags print as written."""
        assert fmt('<s> <p> "x"@en-GB .') == '<s> <p> "x"@en-GB .\n'

    def test_iri_escapes(self) -> None:
        """Needless IRI escapes vanish, necessary ones use \\u00XX."""
        assert fmt("<s> <p> <caf\\u00e9\\u0020x> .") == "<s> <p> <café\\u0020x> .\n"

    def test_local_name_escapes(self) -> None:
        """Needless local-name escapes vanish."""
        assert fmt(EX + "ex:a\\_b ex:p ex:c\\.d .") == EX + "ex:a_b ex:p ex:c.d .\n"

    def test_numbers(self) -> None:
        """Each subclass keeps its shape."""
        source = "<s> <p> 007 , 0.50 , 1.50E+03 , -0.0 , true ."

        assert fmt(source) == "<s> <p> 7 , .5 , 1.5e3 , -.0 , true .\n"


class TestRdfTypeShorthand:
    """`a` substitution with point-of-use bindings."""

    RDF = f"@prefix rdf: <{RDF_NS}> .\n"

    def test_prefixed_rdf_type_becomes_a(self) -> None:
        """Only the predicate is rewritten."""
        source = self.RDF + "rdf:type rdf:type rdf:type ."

        assert fmt(source) == self.RDF + "rdf:type a rdf:type .\n"

    def test_absolute_rdf_type_becomes_a(self) -> None:
        """<...#type> in verb position becomes a."""
        assert fmt(f"<s> <{RDF_NS}type> <o> .") == "<s> a <o> .\n"

    def test_rebinding_applies_forward_only(self) -> None:
        """A later binding affects only later statements."""
        source = (
            f"@prefix r: <{RDF_NS}> .\n"
            "<s> r:type <o> .\n"
            "@prefix r: <http://example.com/> .\n"
            "<s> r:type <o> .\n"
        )

        assert fmt(source) == (
            f"@prefix r: <{RDF_NS}> .\n"
            "<s> a <o> .\n"
            "@prefix r: <http://example.com/> .\n"
            "<s> r:type <o> .\n"
        )

    def test_binding_after_use_does_not_apply(self) -> None:
        """A prefix bound only later is unbound at the point of use."""
        source = f"<s> rdf:type <o> .\n{self.RDF}"

        assert fmt(source) == f"<s> rdf:type <o> .\n{self.RDF}"

    def test_unbound_prefix_warns_in_every_position(self, caplog: pytest.LogCaptureFixture) -> None:
        """Subject, object and datatype names with an unbound prefix are reported."""
        source = 'ex:s <p> ex:o , "v"^^ex:d .'

        with caplog.at_level(logging.WARNING, logger="turtlefmt.syntax.normalize"):
            assert fmt(source) == 'ex:s <p> ex:o , "v"^^ex:d .\n'

        warned = [r.args[2] for r in caplog.records if r.name == "turtlefmt.syntax.normalize"]
        assert warned == ["s", "o", "d"]


# ============================================================================
# COMMENTS AND BLANK LINES
# ============================================================================


class TestComments:
    """Comment placement and blank line handling."""

    def test_trailing_comment_kept(self) -> None:
        """A comment after a statement stays on its line."""
        assert fmt("<s> <p> <o> .   # note") == "<s> <p> <o> . # note\n"

    def test_standalone_comment_before_statement(self) -> None:
        """Own-line comments precede the next statement."""
        assert fmt("# about s\n<s> <p> <o> .") == "# about s\n<s> <p> <o> .\n"

    def test_trailing_whitespace_stripped(self) -> None:
        """Comment text loses trailing whitespace only."""
        assert fmt("#  keep  inner   \n<s> <p> <o> .") == "#  keep  inner\n<s> <p> <o> .\n"

    def test_comment_at_end_of_document(self) -> None:
        """A final comment stays last."""
        assert fmt("<s> <p> <o> .\n# end") == "<s> <p> <o> .\n# end\n"

    def test_comment_after_group(self) -> None:
        """Comments follow the token they came after."""
        source = "<s> <p> <o> ; # first\n <q> <r> . # second"

        assert fmt(source) == "<s> <p> <o> ; # first\n    <q> <r> . # second\n"

    def test_own_line_comment_inside_statement_trails(self) -> None:
        """A statement is never split around a comment."""
        assert fmt("<s> <p>\n# between\n<o> .") == "<s> <p> <o> . # between\n"

    def test_second_comment_for_a_line_gets_its_own_line(self) -> None:
        """A line keeps one trailing comment; the next one follows at column 0."""
        assert fmt("<s> <p> # one\n <o> . # two") == "<s> <p> <o> . # one\n# two\n"

    def test_comments_from_a_split_directive(self) -> None:
        """Comments inside a directive are not merged."""
        source = "PREFIX ex: # note\n<http://example.com/> # done\n"
        once = fmt(source)

        assert once == "@prefix ex: <http://example.com/> . # note\n# done\n"
        assert fmt(once) == once

    def test_extra_comments_inside_statement_are_stable(self) -> None:
        """Extra comment lines in the middle of a statement reformat unchanged."""
        source = "<s> # a\n <p> # b\n <o> ; # c\n <q> <r> ."
        once = fmt(source)

        assert once == "<s> <p> <o> ; # a\n# b\n# c\n    <q> <r> .\n"
        assert fmt(once) == once

    def test_comment_inside_anon(self) -> None:
        """[ # c ] prints as [] with the comment trailing."""
        assert fmt("<s> <p> [ # c\n ] .") == "<s> <p> [] . # c\n"

    def test_comment_inside_block(self) -> None:
        """Comments in a property list attach to the group's line."""
        source = "<s> <p> [\n  <a> <b> ; # ab\n  <c> <d> # cd\n] ."

        assert fmt(source) == "<s> <p> [\n        <a> <b> ; # ab\n        <c> <d> # cd\n    ] .\n"

    def test_blank_lines_collapse(self) -> None:
        """Runs of blank lines become one."""
        assert fmt("<a> <b> <c> .\n\n\n\n<d> <e> <f> .") == "<a> <b> <c> .\n\n<d> <e> <f> .\n"

    def test_leading_blank_lines_removed(self) -> None:
        """Output never starts with a blank line."""
        assert fmt("\n\n\n<a> <b> <c> .") == "<a> <b> <c> .\n"

    def test_blank_line_with_spaces_counts(self) -> None:
        """A whitespace-only line is blank."""
        assert fmt("<a> <b> <c> .\n \t \n<d> <e> <f> .") == "<a> <b> <c> .\n\n<d> <e> <f> .\n"

    def test_blank_line_around_comments(self) -> None:
        """Blank lines between comments and statements are kept (once)."""
        source = "# header\n\n\n# about a\n<a> <b> <c> .\n\n# tail\n"

        assert fmt(source) == "# header\n\n# about a\n<a> <b> <c> .\n\n# tail\n"

    def test_blank_line_inside_statement_dropped(self) -> None:
        """Only blank lines between top-level blocks survive."""
        assert fmt("<s> <p> <o> ;\n\n<q> <r> .") == "<s> <p> <o> ;\n    <q> <r> .\n"


# ============================================================================
# PRINTER API
# ============================================================================


class TestPrinterApi:
    """TurtlePrinter and print_document entry points."""

    def test_print_document_from_code(self) -> None:
        """A Document built in code prints without a source."""
        document = Document(
            (Triples(IriRef("s"), (PredicateObjects(IriRef("p"), (IriRef("o"),)),)),)
        )

        assert print_document(document) == "<s> <p> <o> .\n"

    def test_print_document_from_tree(self) -> None:
        """A SyntaxTree keeps its comments."""
        assert print_document(parse("<s> <p> <o> . # c")) == "<s> <p> <o> . # c\n"

    def test_options_exposed(self) -> None:
        """The printer reports its options."""
        options = FormatOptions(indentation=2)

        assert TurtlePrinter(options).options is options
        assert TurtlePrinter().options == FormatOptions()

    def test_depth_limit_for_built_documents(self) -> None:
        """Trees built in code are depth-limited at print time."""
        term: Collection | IriRef = IriRef("x")
        for _ in range(6):
            term = Collection((term,))
        document = Document((Triples(IriRef("s"), (PredicateObjects(IriRef("p"), (term,)),)),))

        with pytest.raises(DepthLimitExceededError):
            TurtlePrinter(FormatOptions(max_nesting_depth=5)).print_document(document)

    def test_printer_is_reusable(self) -> None:
        """No state leaks between calls."""
        printer = TurtlePrinter()

        first = printer.print(parse("<a> <b> ( 1 ( 2 ) ) ."))
        second = printer.print(parse("<a> <b> ( 1 ( 2 ) ) ."))

        assert first == second

    def test_patch_for_non_canonical(self) -> None:
        """Check mode on a non-canonical file yields a Patch."""
        result = reconcile("<s>   <p> <o>.\n", fmt("<s>   <p> <o>."))

        assert isinstance(result, Patch)
