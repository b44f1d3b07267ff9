from hygiene_core import config
from hygiene_core.layout import InstructionRecorder
from hygiene_core.manager_table import ManagerTable


def render(records, tables, start=0):
    sink = InstructionRecorder()
    end = ManagerTable(records, tables).render(sink, start)
    return sink, end


def test_managers_listed_by_lowest_floor_with_unknown_last(make_tables, make_records):
    tables = make_tables(managers=[(1, 1, "胡宿管"), (1, 2, "郭宿管"), (1, 3, "胡宿管")])
    records = make_records(
        [(1, 1, 1, 103, "a"), (1, 1, 1, 101, "b"), (1, 1, 1, 905, "c")], tables
    )
    sink, end = render(records, tables)
    grid = sink.cells()
    merges = sink.merges()

    assert end == 4
    assert [grid[(r, 1)] for r in range(4)] == ["胡宿管", "胡宿管", "郭宿管", config.UNKNOWN]

    # 胡宿管: two rows, -2 total; 郭宿管: 0; unknown: -1 -> dense ranks 3 / 1 / 2
    assert (0, 1, 1, 1, "胡宿管") in merges
    assert (0, 6, 1, 7, -2) in merges
    assert (0, 8, 1, 8, 3) in merges
    assert (0, 3, 0, 4, "b") in merges
    assert [grid[(r, 2)] for r in (0, 1)] == ["101宿舍", "103宿舍"]
    assert grid[(3, 8)] == 2
    assert (3, 6, 3, 7, -1) in merges

    assert (0, 0, 3, 0, "一号公寓") in merges


def test_manager_without_violations_gets_filler_row(make_tables, make_records):
    tables = make_tables(managers=[(1, 1, "胡宿管"), (1, 2, "郭宿管")])
    records = make_records([(1, 1, 1, 101, "杂物")], tables)
    sink, _ = render(records, tables)
    grid = sink.cells()
    merges = sink.merges()

    assert grid[(1, 1)] == "郭宿管"
    assert grid[(1, 2)] == config.FILLER
    assert (1, 3, 1, 4, config.FILLER) in merges
    assert grid[(1, 5)] == config.FILLER
    assert (1, 6, 1, 7, config.FILLER) in merges
    assert grid[(1, 8)] == 1
    assert grid[(0, 8)] == 2


def test_single_record_manager_still_merges_total_columns(make_tables, make_records):
    tables = make_tables(managers=[(1, 1, "胡宿管")])
    records = make_records([(1, 1, 1, 101, "杂物")], tables)
    sink, _ = render(records, tables)
    assert (0, 6, 0, 7, -1) in sink.merges()
    assert sink.cells()[(0, 5)] == -1


def test_ranks_are_local_to_each_apartment(make_tables, make_records):
    tables = make_tables(managers=[(1, 1, "胡宿管"), (2, 1, "何宿管"), (2, 2, "高宿管")])
    records = make_records(
        [(1, 1, 1, 101, "a"), (1, 1, 2, 101, "b"), (1, 1, 2, 102, "c")], tables
    )
    sink, end = render(records, tables)
    grid = sink.cells()
    assert end == 4
    # apartment 1 first: its only manager ranks first despite a deduction
    assert grid[(0, 0)] == "一号公寓"
    assert grid[(0, 8)] == 1
    # apartment 2: 何宿管 -2 (rank 2), 高宿管 placeholder (rank 1)
    assert grid[(1, 1)] == "何宿管"
    assert grid[(1, 8)] == 2
    assert grid[(3, 1)] == "高宿管"
    assert grid[(3, 8)] == 1
    assert (1, 0, 3, 0, "二号公寓") in sink.merges()


def test_apartment_missing_from_roster_still_rendered(make_tables, make_records):
    tables = make_tables(managers=[(1, 1, "胡宿管")])
    records = make_records([(1, 1, 3, 101, "a")], tables)
    table = ManagerTable(records, tables)
    assert table.apartments == [1, 3]
    sink, end = render(records, tables)
    grid = sink.cells()
    assert end == 2
    assert grid[(1, 0)] == "三号公寓"
    assert grid[(1, 1)] == config.UNKNOWN


def test_empty_roster_and_no_records_renders_nothing(make_tables):
    sink, end = render([], make_tables())
    assert end == 0
    assert sink.instructions == []
