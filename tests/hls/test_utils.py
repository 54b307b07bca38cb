from cbdvr.hls import segment_seq, root_url_of, join_url


def test_segment_seq():
    assert segment_seq("media_w402181541_b5128000_t64RlBTOjMwLjA=_2311.ts") == 2311
    assert segment_seq("https://host/live-hls/amlst:x/media_w1_b1_t1_17.ts?token=abc") == 17
    assert segment_seq("media_w1_b1_t1_abc.ts") is None
    assert segment_seq("init.ts") is None
    assert segment_seq("") is None


def test_root_url_of():
    assert root_url_of("https://host/a/playlist.m3u8") == "https://host/a/"
    assert root_url_of("https://host/a/other.m3u8") == "https://host/a/other.m3u8"


def test_join_url():
    assert join_url("https://host/a/", "seg_1.ts") == "https://host/a/seg_1.ts"
    assert join_url("https://host/a/", "https://cdn/seg_1.ts") == "https://cdn/seg_1.ts"
