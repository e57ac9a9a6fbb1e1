from tradelab.market_types import TOB, Side


def test_side_values():
    assert Side(0) is Side.BUY
    assert Side(1) is Side.SELL


def test_tob_equality():
    assert TOB(1.0, 5, 1.1, 4) == TOB(1.0, 5, 1.1, 4)
    assert not TOB(1.0, 5, 1.1, 4) == TOB(1.0, 6, 1.1, 4)


def test_tob_str():
    assert str(TOB(1.0, 5, 1.1, 4)) == "Bid: @1/5 | Ask: @1.1/4"


def test_tob_mutable():
    tob = TOB(1.0, 10, 1.1, 8)
    tob.bid_volume -= 5
    assert tob == TOB(1.0, 5, 1.1, 8)