"""Checks of the column types the input validation relies on."""

import re

import db_init_DDS_queries


def column(name):
    return re.search(rf'`{name}` ([a-z]+(\(\d+(,\d+)?\))?)', db_init_DDS_queries.ORDERS).group(1)


def test_weight_keeps_any_positive_real():
    # a fixed-point column would round small weights down to zero
    assert column('weight') == 'double'


def test_completed_time_is_not_limited_to_2038():
    # timestamp columns end in 2038 and are converted with the session time zone
    assert column('completed_time') == 'datetime(3)'
