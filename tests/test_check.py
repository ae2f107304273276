"""End-to-end tests checking Python source against the bundled table."""

import textwrap

import pytest

from chaincheck.config import CheckSettings
from chaincheck.knowledge import load_default_knowledge_base
from chaincheck.models import AmbiguousService, MissingArguments
from chaincheck.queries import CheckPathsQuery, CheckQuery, collect_python_files


@pytest.fixture(scope="module")
def kb():
    return load_default_knowledge_base()


def _check(kb, source: str, settings=None):
    return CheckQuery(kb).execute(textwrap.dedent(source), path="app.py", settings=settings)


def _findings(kb, source: str, settings=None):
    report = _check(kb, source, settings)
    return [f for unit in report.units for f in unit.findings]


class TestMissingArguments:
    def test_missing_message_body(self, kb):
        findings = _findings(kb, """
            from chaincheck import required_props
            import aws_sdk_sqs

            @required_props
            async def do_call(config):
                something = abs(-3)
                sqs_client = aws_sdk_sqs.Client.new(config)
                await sqs_client.send_message().queue_url("...").send()
        """)

        assert len(findings) == 1
        finding = findings[0]
        assert (finding.method, finding.service, finding.missing) == ("send_message", "sqs", ("message_body",))
        assert (finding.location.line, finding.location.column) == (9, 22)

    def test_missing_queue_url_and_message_body(self, kb):
        findings = _findings(kb, """
            @required_props
            async def do_call(config):
                sqs_client = aws_sdk_sqs.Client.new(config)
                await sqs_client.send_message().send()
        """)
        assert [f.missing for f in findings] == [("queue_url", "message_body")]

    def test_argument_built_by_other_calls(self, kb):
        findings = _findings(kb, """
            @required_props
            async def do_call(config):
                sqs_client = aws_sdk_sqs.Client.new(config)
                await (
                    sqs_client.send_message()
                    .message_body(create_message().strip())
                    .send()
                )
                value = abs(-3)
        """)
        assert [f.missing for f in findings] == [("queue_url",)]

    def test_complete_call_is_silent(self, kb):
        report = _check(kb, """
            @required_props
            async def do_call(sqs: aws_sdk_sqs.Client):
                await sqs.send_message().queue_url(url).message_body(body).send()
        """)
        assert report.ok
        assert len(report.units) == 1

    def test_chain_nested_in_setter_argument(self, kb):
        report = _check(kb, """
            @required_props
            async def forward(sqs_client: aws_sdk_sqs.Client, s3_client: aws_sdk_s3.Client):
                await sqs_client.send_message().queue_url(url).message_body(
                    await s3_client.get_object().bucket("b").key("k").send()
                ).send()
        """)
        assert report.ok

    def test_incomplete_chain_nested_in_setter_argument(self, kb):
        findings = _findings(kb, """
            @required_props
            async def forward(sqs_client: aws_sdk_sqs.Client, s3_client: aws_sdk_s3.Client):
                await sqs_client.send_message().queue_url(url).message_body(
                    await s3_client.get_object().bucket("b").send()
                ).send()
        """)
        assert [(f.method, f.service, f.missing) for f in findings] == [
            ("get_object", "s3", ("key",)),
        ]

    def test_multiple_clients_one_issue(self, kb):
        findings = _findings(kb, """
            @required_props
            async def dynamo_and_sqs(sqs_client: aws_sdk_sqs.Client, dynamodb_client: aws_sdk_dynamodb.Client):
                await sqs_client.receive_message().queue_url("").send()
                await (
                    dynamodb_client
                    .create_global_table()
                    .global_table_name("...")
                    .send()
                )
        """)
        assert findings == [
            MissingArguments("create_global_table", "dynamodb", ("replication_group",), findings[0].location)
        ]
        assert findings[0].location.line == 7

    def test_multiple_clients_same_method_name(self, kb):
        findings = _findings(kb, """
            @required_props
            async def evidently(evidently_client: aws_sdk_evidently.Client, rekognition_client: aws_sdk_rekognition.Client):
                await evidently_client.create_project().send()
                await rekognition_client.create_project().send()
        """)
        assert [(f.service, f.missing) for f in findings] == [
            ("evidently", ("name",)),
            ("rekognition", ("project_name",)),
        ]

    def test_unrelated_receiver_ignored(self, kb):
        findings = _findings(kb, """
            @required_props
            def f(sqs_client: aws_sdk_sqs.Client):
                mailbox = make_mailbox()
                mailbox.send_message("hello")
        """)
        assert findings == []

    def test_method_with_self_field(self, kb):
        report = _check(kb, """
            class Publisher:
                def __init__(self, config):
                    self.sqs_client = aws_sdk_sqs.Client.new(config)

                @required_props
                async def publish(self, body):
                    await self.sqs_client.send_message().message_body(body).send()
        """)
        assert [u.name for u in report.units] == ["Publisher.publish"]
        assert [f.missing for f in report.units[0].findings] == [("queue_url",)]


class TestAmbiguity:
    def test_long_candidate_list(self, kb):
        findings = _findings(kb, """
            from aws_sdk_lambda import Client

            @required_props
            async def do_call(client: Client):
                await client.tag_resource().send()
        """)
        assert len(findings) == 1
        assert isinstance(findings[0], AmbiguousService)
        assert findings[0].candidates[:5] == ("dynamodb", "ecs", "eventbridge", "kinesis", "lambda")

    def test_short_candidate_list(self, kb):
        findings = _findings(kb, """
            @required_props
            async def do_call(client: Client):
                await client.list_artifacts().send()
        """)
        assert findings == [
            AmbiguousService("list_artifacts", ("amplify", "codeartifact", "sagemaker"), findings[0].location)
        ]

    def test_services_hint_resolves(self, kb):
        findings = _findings(kb, """
            @required_props(services="amplify")
            async def do_call(client: Client):
                await client.list_artifacts().app_id("a").send()
        """)
        assert [(f.service, f.missing) for f in findings] == [("amplify", ("branch_name", "job_id"))]

    def test_ambiguity_hides_later_calls(self, kb):
        findings = _findings(kb, """
            @required_props
            async def do_call(client: Client):
                await client.list_artifacts().send()
                await client.send_message().send()
        """)
        assert [type(f) for f in findings] == [AmbiguousService]

    def test_ambiguity_continue_setting(self, kb):
        findings = _findings(kb, """
            @required_props
            async def do_call(client: Client):
                await client.list_artifacts().send()
                await client.send_message().send()
        """, settings=CheckSettings(stop_on_ambiguity=False))
        assert [type(f) for f in findings] == [AmbiguousService, MissingArguments]


class TestUnits:
    def test_unmarked_functions_ignored(self, kb):
        report = _check(kb, """
            async def do_call(sqs: aws_sdk_sqs.Client):
                await sqs.send_message().send()
        """)
        assert report.units == []

    def test_check_all_functions(self, kb):
        report = _check(kb, """
            async def do_call(sqs: aws_sdk_sqs.Client):
                await sqs.send_message().send()
        """, settings=CheckSettings(check_all_functions=True))
        assert len(report.units) == 1
        assert not report.ok

    def test_dotted_marker_and_custom_name(self, kb):
        report = _check(kb, """
            @checks.verify()
            def f(q: aws_sdk_sqs.Client):
                q.receive_message().send()
        """, settings=CheckSettings(decorator="verify"))
        assert [f.missing for f in report.units[0].findings] == [("queue_url",)]

    def test_nested_function_reported_once(self, kb):
        report = _check(kb, """
            @required_props
            def outer(q: aws_sdk_sqs.Client):
                @required_props
                def inner():
                    q.receive_message().send()
                return inner
        """)
        assert [u.name for u in report.units] == ["outer"]
        assert len(report.units[0].findings) == 1

    def test_marked_function_inside_unmarked_one(self, kb):
        report = _check(kb, """
            def factory():
                @required_props
                def inner(q: aws_sdk_sqs.Client):
                    q.receive_message().send()
                return inner
        """)
        assert [u.name for u in report.units] == ["factory.inner"]

    def test_unit_location_is_marker(self, kb):
        report = _check(kb, """
            import os

            @required_props
            def f():
                pass
        """)
        assert (report.units[0].location.line, report.units[0].location.column) == (4, 2)


class TestConfigurationErrors:
    def test_unknown_service(self, kb):
        report = _check(kb, """
            @required_props(services="sqs, nosuch, other")
            def f(client: Client):
                client.send_message().send()
        """)
        unit = report.units[0]
        assert unit.findings == []
        assert unit.configuration_error.endswith("nosuch, other")
        assert not report.ok

    def test_positional_argument(self, kb):
        report = _check(kb, """
            @required_props("sqs")
            def f():
                pass
        """)
        assert report.units[0].configuration_error == "the only allowed argument is `services`"

    def test_unknown_keyword(self, kb):
        report = _check(kb, """
            @required_props(sdk="sqs")
            def f():
                pass
        """)
        assert "only allowed argument" in report.units[0].configuration_error

    def test_empty_services(self, kb):
        report = _check(kb, """
            @required_props(services="")
            def f():
                pass
        """)
        assert report.units[0].configuration_error.startswith("expected one or more services")

    def test_services_as_list(self, kb):
        report = _check(kb, """
            @required_props(services=["sqs", "s3"])
            def f():
                pass
        """)
        assert report.units[0].services == ["sqs", "s3"]
        assert report.ok


class TestSourceHandling:
    def test_syntax_error_propagates(self, kb):
        with pytest.raises(SyntaxError):
            _check(kb, "def broken(:\n")

    def test_repeated_checks_identical(self, kb):
        source = """
            @required_props
            async def do_call(client: Client, sqs_client: aws_sdk_sqs.Client):
                await sqs_client.send_message().send()
                await client.list_artifacts().send()
        """
        assert _check(kb, source) == _check(kb, source)

    def test_check_paths(self, kb, tmp_path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.py").write_text(
            "@required_props\ndef f(q: aws_sdk_sqs.Client):\n    q.receive_message().send()\n"
        )
        (tmp_path / "a.py").write_text("x = 1\n")
        (tmp_path / "notes.txt").write_text("not python")

        result = CheckPathsQuery(kb).execute([tmp_path])

        assert [r.path for r in result.files] == [str(tmp_path / "a.py"), str(tmp_path / "pkg" / "b.py")]
        assert result.unit_count == 1
        assert not result.ok

    def test_collect_deduplicates(self, tmp_path):
        path = tmp_path / "a.py"
        path.write_text("")
        assert collect_python_files([path, tmp_path]) == [path]


class TestRuntimeMarker:
    def test_bare_marker_returns_function(self):
        from chaincheck import required_props

        def f():
            return 1

        assert required_props(f) is f

    def test_marker_with_services_returns_function(self):
        from chaincheck import required_props

        @required_props(services="sqs")
        def f():
            return 1

        assert f() == 1
