import logging

from .reed_solomon import calculate_error_correction

logger = logging.getLogger(__name__)


def split_blocks(data_codewords, cw_info):
    # message blocks in transmission order: every block of group 1, then every block of group 2
    assert len(data_codewords) == cw_info.data_codewords
    blocks = []
    i = 0
    for group_num in range(cw_info.groups_count):
        for _ in range(cw_info.block_counts[group_num]):
            size = cw_info.data_cw_counts[group_num]
            blocks.append(list(data_codewords[i:i + size]))
            i += size
    return blocks


def interleave(blocks):
    # first codeword of every block, then the second of every block, and so on;
    # blocks that ran out of codewords are skipped
    content_ints = []
    for cw_num in range(max(len(block) for block in blocks)):
        for block in blocks:
            if cw_num < len(block):
                content_ints.append(block[cw_num])
    return content_ints


def interleave_blocks(data_codewords, cw_info):
    """Split the data codewords into their RS blocks, compute each block's EC
    codewords and return the final codeword sequence: interleaved data followed
    by interleaved EC codewords.
    """
    message_ints = split_blocks(data_codewords, cw_info)
    eccw_ints = [calculate_error_correction(block, cw_info.eccw_count) for block in message_ints]
    logger.debug(
        "%d blocks of %s data codewords, %d EC codewords each",
        len(message_ints), "/".join(str(n) for n in cw_info.data_cw_counts), cw_info.eccw_count,
    )
    content_ints = interleave(message_ints) + interleave(eccw_ints)
    assert len(content_ints) == cw_info.total_codewords
    return content_ints
