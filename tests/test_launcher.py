from mrpack.core.launcher import render_launcher
from mrpack.core.schemas import RoleArguments


def _args(block):
    return RoleArguments(clauses=block.split(" \\\n"), block=block)


def test_launcher_embeds_arguments_and_artifact():
    block = "-D mapred.reduce.tasks=0 \\\n-mapper 'python3 wordcount.pyz mapper'"
    body = render_launcher("wordcount", _args(block))

    assert body.startswith("#!/bin/sh\n")
    assert "$hadoop $confswitch jar $streaming \\\n" + block + " \\\n$input \\\n$output \\\n" in body
    assert body.endswith("-file $dir/wordcount.pyz\n")


def test_launcher_handles_options_and_hadoop_home():
    body = render_launcher("job", _args("-foo bar"))

    assert 'while getopts ":c:s:" opt; do' in body
    assert 'c) confswitch="--config $OPTARG";;' in body
    assert '\\?) echo "Invalid option: -$OPTARG"; exit 1;;' in body
    assert 'hadoop="$HADOOP_HOME/bin/hadoop"' in body
    assert 'streaming="/usr/lib/hadoop/contrib/streaming/hadoop-streaming-*.jar"' in body
    assert "if [ $# -lt 2 ]" in body


def test_override_block_is_not_altered():
    body = render_launcher("job", _args("-foo bar"))
    assert "\n-foo bar \\\n$input \\\n" in body
