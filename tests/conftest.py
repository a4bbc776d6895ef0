import pytest

UFW_LINE = (
    "Dec 27 13:54:32 ubuntu-16.04 kernel: [  725.361432] [UFW BLOCK] IN=eth0 OUT= "
    "MAC=00:00:00:00:00:00:00:00:00:00:00:00:08:00 SRC={src} DST=127.0.0.1 LEN=40 "
    "TOS=0x00 PREC=0x00 TTL=243 ID=50779 PROTO=TCP SPT=18776 DPT={dpt} WINDOW=5840 "
    "RES=0x00 SYN URGP=0\n"
)


def ufw_line(src, dpt):
    return UFW_LINE.format(src=src, dpt=dpt)


@pytest.fixture
def sample_lines():
    return (
        [ufw_line("127.0.0.1", 22)] * 8
        + [ufw_line("127.0.0.1", 23)] * 2
        + [ufw_line("127.0.0.2", 23)] * 2
    )


@pytest.fixture
def sample_log(tmp_path, sample_lines):
    path = tmp_path / "ufw.log"
    path.write_text("".join(sample_lines), encoding="utf-8")
    return path


@pytest.fixture
def make_line():
    return ufw_line
