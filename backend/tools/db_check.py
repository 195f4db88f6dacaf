import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
USER_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Recent Orders ===")
if USER_ID:
    cur.execute(
        "SELECT id, user_id, total_amount, created_at FROM orders WHERE user_id=? ORDER BY id DESC LIMIT 20",
        (USER_ID,),
    )
else:
    cur.execute("SELECT id, user_id, total_amount, created_at FROM orders ORDER BY id DESC LIMIT 20")
for r in cur.fetchall():
    print({"id": r[0], "user_id": r[1], "total_amount": r[2], "created_at": r[3]})

print("\n=== Cart Items ===")
if USER_ID:
    cur.execute(
        "SELECT id, user_id, product_id, quantity FROM cart_items WHERE user_id=? ORDER BY id",
        (USER_ID,),
    )
else:
    cur.execute("SELECT id, user_id, product_id, quantity FROM cart_items ORDER BY id LIMIT 50")
for r in cur.fetchall():
    print(r)

print("\n=== Cart items pointing at missing products ===")
cur.execute(
    "SELECT c.id, c.user_id, c.product_id FROM cart_items c "
    "LEFT JOIN products p ON p.id = c.product_id WHERE p.id IS NULL"
)
for r in cur.fetchall():
    print(r)

conn.close()
