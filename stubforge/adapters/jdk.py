# Abstract contracts of a few JDK types, so targets that extend them resolve
# without a JDK source tree on the source path. Only members relevant to
# stubbing are listed; default-method bodies are reduced to a bare return.

JDK_SOURCES = {
    "java.lang.Runnable": """
package java.lang;
public interface Runnable {
    void run();
}
""",
    "java.lang.AutoCloseable": """
package java.lang;
public interface AutoCloseable {
    void close() throws Exception;
}
""",
    "java.io.Closeable": """
package java.io;
public interface Closeable extends AutoCloseable {
    void close() throws IOException;
}
""",
    "java.lang.Comparable": """
package java.lang;
public interface Comparable<T> {
    int compareTo(T o);
}
""",
    "java.lang.Iterable": """
package java.lang;
import java.util.Iterator;
public interface Iterable<T> {
    Iterator<T> iterator();
    default void forEach(java.util.function.Consumer<? super T> action) { }
    default java.util.Spliterator<T> spliterator() { return null; }
}
""",
    "java.lang.CharSequence": """
package java.lang;
public interface CharSequence {
    int length();
    char charAt(int index);
    CharSequence subSequence(int start, int end);
    public String toString();
}
""",
    "java.util.Iterator": """
package java.util;
public interface Iterator<E> {
    boolean hasNext();
    E next();
    default void remove() { }
}
""",
    "java.util.Comparator": """
package java.util;
public interface Comparator<T> {
    int compare(T o1, T o2);
    boolean equals(Object obj);
    default Comparator<T> reversed() { return null; }
}
""",
    "java.util.concurrent.Callable": """
package java.util.concurrent;
public interface Callable<V> {
    V call() throws Exception;
}
""",
    "java.util.function.Supplier": """
package java.util.function;
public interface Supplier<T> {
    T get();
}
""",
    "java.io.Serializable": """
package java.io;
public interface Serializable {
}
""",
    "java.lang.Cloneable": """
package java.lang;
public interface Cloneable {
}
""",
    "java.lang.Enum": """
package java.lang;
public abstract class Enum<E extends Enum<E>> implements Comparable<E>, java.io.Serializable {
    protected Enum(String name, int ordinal) { }
    public final String name() { return null; }
    public final int ordinal() { return 0; }
    public final int compareTo(E o) { return 0; }
}
""",
}

# public top-level types of JDK packages commonly imported on demand; lets
# `import java.util.*` resolve List without a JDK source tree
JDK_PACKAGES = {
    "java.io": frozenset({
        "BufferedInputStream", "BufferedOutputStream", "BufferedReader", "BufferedWriter",
        "ByteArrayInputStream", "ByteArrayOutputStream", "Closeable", "DataInput",
        "DataInputStream", "DataOutput", "DataOutputStream", "EOFException", "Externalizable",
        "File", "FileFilter", "FileInputStream", "FileNotFoundException", "FileOutputStream",
        "FileReader", "FileWriter", "FilenameFilter", "Flushable", "IOException",
        "InputStream", "InputStreamReader", "ObjectInput", "ObjectInputStream", "ObjectOutput",
        "ObjectOutputStream", "OutputStream", "OutputStreamWriter", "PrintStream",
        "PrintWriter", "Reader", "Serializable", "StringReader", "StringWriter",
        "UncheckedIOException", "UnsupportedEncodingException", "Writer",
    }),
    "java.util": frozenset({
        "AbstractCollection", "AbstractList", "AbstractMap", "AbstractQueue",
        "AbstractSequentialList", "AbstractSet", "ArrayDeque", "ArrayList", "Arrays",
        "BitSet", "Calendar", "Collection", "Collections", "Comparator",
        "ConcurrentModificationException", "Date", "Deque", "Dictionary", "EnumMap",
        "EnumSet", "Enumeration", "EventListener", "EventObject", "HashMap", "HashSet",
        "Hashtable", "IdentityHashMap", "Iterator", "LinkedHashMap", "LinkedHashSet",
        "LinkedList", "List", "ListIterator", "Locale", "Map", "NavigableMap",
        "NavigableSet", "NoSuchElementException", "Objects", "Optional", "OptionalDouble",
        "OptionalInt", "OptionalLong", "PriorityQueue", "Properties", "Queue", "Random",
        "RandomAccess", "Scanner", "Set", "SortedMap", "SortedSet", "Spliterator", "Stack",
        "StringJoiner", "TimeZone", "Timer", "TimerTask", "TreeMap", "TreeSet", "UUID",
        "Vector", "WeakHashMap",
    }),
    "java.util.function": frozenset({
        "BiConsumer", "BiFunction", "BiPredicate", "BinaryOperator", "BooleanSupplier",
        "Consumer", "DoubleBinaryOperator", "DoubleConsumer", "DoubleFunction",
        "DoublePredicate", "DoubleSupplier", "DoubleUnaryOperator", "Function",
        "IntBinaryOperator", "IntConsumer", "IntFunction", "IntPredicate", "IntSupplier",
        "IntUnaryOperator", "LongBinaryOperator", "LongConsumer", "LongFunction",
        "LongPredicate", "LongSupplier", "LongUnaryOperator", "ObjDoubleConsumer",
        "ObjIntConsumer", "ObjLongConsumer", "Predicate", "Supplier", "ToDoubleFunction",
        "ToIntFunction", "ToLongFunction", "UnaryOperator",
    }),
    "java.util.concurrent": frozenset({
        "BlockingQueue", "Callable", "CompletableFuture", "CompletionStage",
        "ConcurrentHashMap", "ConcurrentMap", "CountDownLatch", "ExecutionException",
        "Executor", "ExecutorService", "Executors", "Future", "ScheduledExecutorService",
        "ThreadFactory", "TimeUnit", "TimeoutException",
    }),
}

# simple names implicitly imported into every compilation unit
JAVA_LANG = frozenset({
    "AutoCloseable", "Boolean", "Byte", "CharSequence", "Character", "Class",
    "ClassCastException", "ClassNotFoundException", "Cloneable", "Comparable",
    "Deprecated", "Double", "Enum", "Error", "Exception", "Float",
    "IllegalArgumentException", "IllegalStateException", "IndexOutOfBoundsException",
    "Integer", "InterruptedException", "Iterable", "Long", "Math", "Number",
    "NullPointerException", "Object", "Override", "Process", "Runnable",
    "RuntimeException", "SafeVarargs", "Short", "String", "StringBuffer",
    "StringBuilder", "SuppressWarnings", "System", "Thread", "Throwable",
    "UnsupportedOperationException", "Void",
})
