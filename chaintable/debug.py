from .shared import printf
from .table import HashTable


def dump_table(table: HashTable, name: str):
    printf(
        "== {0:s} (size={1:d}, buckets={2:d}) ==\n",
        name,
        table.size(),
        table.bucket_count,
    )

    for index in range(table.bucket_count):
        dump_bucket(table, index)


def dump_bucket(table: HashTable, index: int):
    printf("{0:04d} ", index)

    entry = table.buckets[index]
    if entry is None:
        printf("-\n")
        return

    links = []
    while entry is not None:
        links.append("{0!r}={1!r}".format(entry.key, entry.value))
        entry = entry.next
    printf("{0:s}\n", " -> ".join(links))
