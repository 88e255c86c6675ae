import pytest
from pydantic import ValidationError

from qcos.core.models import (
    ListDirParams,
    ListDirResult,
    ListPattern,
    PathInfo,
    UploadResult,
    UploadSliceFirstResult,
    UploadSliceResult,
)


def test_first_slice_result_inherits_upload_fields():
    first = UploadSliceFirstResult.model_validate({
        "access_url": "http://a",
        "resource_path": "/1/b/f",
        "source_url": "http://s",
        "url": "",
        "offset": 1024,
        "session": "sess",
        "slice_size": 2048,
        "serverside_extra": True,
    })

    assert isinstance(first, UploadSliceResult)
    assert isinstance(first, UploadResult)
    assert not first.is_complete
    assert (first.offset, first.session, first.slice_size) == (1024, "sess", 2048)
    assert first.to_upload_result() == UploadResult(
        access_url="http://a", resource_path="/1/b/f", source_url="http://s"
    )


def test_slice_result_defaults():
    part = UploadSliceResult.model_validate({})
    assert (part.offset, part.session, part.url) == (0, "", "")


def test_upload_result_completion():
    assert UploadResult(url="http://public/f").is_complete
    assert not UploadResult().is_complete


def test_path_info_coerces_numeric_strings():
    info = PathInfo.model_validate({"filelen": "12", "filesize": "34", "name": "f"})
    assert (info.filelen, info.filesize) == (12, 34)


def test_path_info_rejects_bad_numbers():
    with pytest.raises(ValidationError):
        PathInfo.model_validate({"filesize": "big"})


def test_list_result_accepts_null_infos():
    page = ListDirResult.model_validate({
        "context": "",
        "dircount": 0,
        "filecount": 0,
        "has_more": False,
        "infos": None,
    })
    assert page.infos == []


def test_list_result_parses_infos():
    page = ListDirResult.model_validate({
        "context": "next",
        "dircount": 1,
        "filecount": 1,
        "has_more": True,
        "infos": [{"name": "a"}, {"name": "b.txt", "filesize": 3}],
    })
    assert [info.name for info in page.infos] == ["a", "b.txt"]
    assert page.has_more


def test_list_params_defaults_to_query():
    assert ListDirParams().to_query() == {
        "num": "20",
        "pattern": "eListBoth",
        "order": "0",
        "context": "",
    }


def test_list_params_custom():
    params = ListDirParams(num=10, pattern=ListPattern.FILE_ONLY, order=1, context="c")
    assert params.to_query() == {
        "num": "10",
        "pattern": "eListFileOnly",
        "order": "1",
        "context": "c",
    }


@pytest.mark.parametrize(
    "kwargs", [{"num": 0}, {"order": 2}, {"pattern": "all"}, {"context": None}]
)
def test_list_params_validation(kwargs):
    with pytest.raises(ValidationError):
        ListDirParams(**kwargs)
