# -*- coding: utf-8 -*-
from uuid import uuid4

from app.modules.analytics.enums import Timeframe
from app.modules.analytics.services import report_descriptors as rd
from app.modules.analytics.services.report_query import (
    LOGS_PAGE_SIZE,
    RawReportQuery,
    entity_type_of,
    page_of,
    search_of,
    status_of,
    timeframe_of,
    user_id_of,
    uuid_of,
)
from app.modules.files.enums import DownloadStatus, EntityType


def test_endpoint_defaults_come_from_descriptors():
    raw = RawReportQuery()
    assert timeframe_of(raw, rd.TOTAL_DOWNLOADS) is Timeframe.last_7d
    assert timeframe_of(raw, rd.DOWNLOAD_LOG_ROWS) is Timeframe.last_7d
    assert timeframe_of(raw, rd.USER_DOWNLOADS) is Timeframe.last_30d
    assert timeframe_of(raw, rd.PROJECT_ROLLUP) is Timeframe.last_30d
    assert timeframe_of(raw, Timeframe.last_90d) is Timeframe.last_90d
    assert page_of(raw, LOGS_PAGE_SIZE).limit == 50


def test_explicit_timeframe_wins_over_descriptor_default():
    raw = RawReportQuery(timeframe="90d")
    assert timeframe_of(raw, rd.TOTAL_DOWNLOADS) is Timeframe.last_90d
    assert timeframe_of(RawReportQuery(timeframe="bogus"), rd.TOTAL_DOWNLOADS) is Timeframe.last_7d


def test_entity_type_accepts_singular_and_all():
    assert entity_type_of(RawReportQuery(entity_type="episode")) is EntityType.episodes
    assert entity_type_of(RawReportQuery(entity_type="Scripts")) is EntityType.scripts
    assert entity_type_of(RawReportQuery(entity_type="all")) is None
    assert entity_type_of(RawReportQuery(entity_type="podcasts")) is None


def test_status_filter():
    assert status_of(RawReportQuery(status="failed")) is DownloadStatus.failed
    assert status_of(RawReportQuery(status="unknown")) is None
    assert status_of(RawReportQuery()) is None


def test_ids_and_search():
    value = uuid4()
    assert uuid_of(str(value)) == value
    assert uuid_of("all") is None
    assert uuid_of("123") is None
    assert user_id_of(RawReportQuery(user_id=" u-9 ")) == "u-9"
    assert search_of(RawReportQuery(search="   ")) is None
    assert search_of(RawReportQuery(search=" ana ")) == "ana"
