"""Launcher script rendering."""

from __future__ import annotations

from .config import ARCHIVE_SUFFIX
from .schemas import RoleArguments

LAUNCHER_TEMPLATE = """#!/bin/sh
confswitch=""
streaming=""
while getopts ":c:s:" opt; do
	case $opt in
		c) confswitch="--config $OPTARG";;
		s) streaming="$OPTARG";;
		\\?) echo "Invalid option: -$OPTARG"; exit 1;;
		:) echo "Option -$OPTARG requires an argument."; exit 1;;
	esac
done
shift $((OPTIND-1))

if [ $# -lt 2 ]
then
	echo "Usage: $0 [OPTION...] HDFSINPUTPATH... HDFSOUTPUTPATH"
	echo ""
	echo "HDFSINPUTPATH can be repeated to use multiple paths as input for the job."
	echo ""
	echo "Options:"
	echo " -c HADOOPCONFDIR  Passed to hadoop as --config (see hadoop help)."
	echo " -s STREAMINGJAR   Path to hadoop-streaming-*.jar"
	echo ""
	exit 1
fi

input=""
output=""
index=0
for path in "$@"
do
	index=$((index + 1))
	if [ $index -ne $# ]
	then
		input="$input -input $path"
	else
		output="-output $path"
	fi
done

if [ -n "$HADOOP_HOME" ]
then
	hadoop="$HADOOP_HOME/bin/hadoop"
	if [ -z "$streaming" ]
	then
		streaming="$HADOOP_HOME/contrib/streaming/hadoop-streaming-*.jar"
	fi
else
	hadoop="hadoop"
	if [ -z "$streaming" ]
	then
		streaming="/usr/lib/hadoop/contrib/streaming/hadoop-streaming-*.jar"
	fi
fi
dir=`dirname $0`

$hadoop $confswitch jar $streaming \\
%(arguments)s \\
$input \\
$output \\
-file $dir/%(artifact)s
"""


def render_launcher(job_name: str, role_arguments: RoleArguments) -> str:
    """Fill the launcher template for ``job_name``; nothing is executed."""
    return LAUNCHER_TEMPLATE % {
        "arguments": role_arguments.block,
        "artifact": job_name + ARCHIVE_SUFFIX,
    }
